"""
Offset-aware removal of XML markup.

The stripper walks the document once. Text between markup is copied verbatim (entities
are not decoded), so every text run keeps its position relative to the others. Two
renderings are supported:

- compact (``keep_offsets=False``): markup disappears entirely and each retained
  attribute value is written out as the bare value followed by one space, with one
  space before it too unless the output so far is empty or already ends in whitespace.
- whitespacing (``keep_offsets=True``): every markup character becomes a space
  (newlines stay newlines) and retained attribute values stay exactly where they were,
  so the output has the length of the input and all text keeps its input offset.
"""

import logging
import re

from lxml import etree

from ere_reader.exceptions import MarkupError

_NAME_START = re.compile(r'[A-Za-z_:]')
_START_TAG = re.compile(r'<([A-Za-z_:][\w:.\-]*)((?:[^>"\']|"[^"]*"|\'[^\']*\')*)>')
_END_TAG = re.compile(r'</[^>]*>')
_COMMENT = re.compile(r'<!--.*?-->', re.S)
_CDATA = re.compile(r'<!\[CDATA\[(.*?)\]\]>', re.S)
_PROCESSING_INSTRUCTION = re.compile(r'<\?.*?\?>', re.S)
_DECLARATION = re.compile(r'<!(?:[^>\[\]]|\[[^\]]*\])*>')
_ATTRIBUTE = re.compile(r'([^\s=/>"\']+)\s*=\s*(?:"([^"]*)"|\'([^\']*)\')')

_PROLOG = re.compile(r'^\s*(?:<\?xml[^>]*\?>)?\s*(?:<!DOCTYPE(?:[^>\[]|\[[^\]]*\])*>)?', re.S)
_FRAGMENT_ROOT = 'ere_reader_fragment'


def _as_text(xml_text):
    if isinstance(xml_text, bytes):
        try:
            return xml_text.decode('utf-8')
        except UnicodeDecodeError as e:
            raise MarkupError(f"Document is not valid UTF-8: {e}", offset=e.start) from e
    if not isinstance(xml_text, str):
        raise TypeError(f"Expected str or bytes, got {type(xml_text).__name__}")
    return xml_text


def _blank(segment):
    return ''.join('\n' if char == '\n' else ' ' for char in segment)


def _is_stray(text, start):
    """A '<' followed by something that cannot open a tag, comment, declaration or PI."""
    if start + 1 == len(text):
        return False
    return text[start + 1] not in '!?/' and not _NAME_START.match(text, start + 1)


def _ends_with_space(pieces):
    # start of output counts as a boundary
    for piece in reversed(pieces):
        if piece:
            return piece[-1].isspace()
    return True


class MarkupStripper:
    """
    Strips XML markup, keeping the values of whitelisted attributes on whitelisted tags.

    The whitelists are frozen at construction, so one instance can be shared freely and
    differently configured strippers can coexist.
    """

    def __init__(self, retain_tags=(), retain_attributes=(), keep_offsets=False, logger=None):
        """
        :param retain_tags: tag names whose attributes may be kept.

        :param retain_attributes: attribute names whose values are kept on those tags.

        :param keep_offsets: blank markup with spaces instead of removing it.

        :param logger: optional logger, defaults to the module logger.
        """
        if isinstance(retain_tags, str) or isinstance(retain_attributes, str):
            raise ValueError("retain_tags and retain_attributes must be collections of names, not a string")
        self.retain_tags = frozenset(retain_tags)
        self.retain_attributes = frozenset(retain_attributes)
        self.keep_offsets = bool(keep_offsets)
        self.logger = logger or logging.getLogger(__name__)

    def __repr__(self):
        return (f"MarkupStripper(retain_tags={sorted(self.retain_tags)}, "
                f"retain_attributes={sorted(self.retain_attributes)}, keep_offsets={self.keep_offsets})")

    def strip(self, xml_text):
        """
        Remove markup from ``xml_text``.

        An unterminated construct at the end of the input (a tag, comment or CDATA section
        with no closing delimiter) ends the scan: the text before it is returned and, in
        whitespacing mode, the remainder is blanked. A ``<`` that cannot open any markup
        construct (``a < b``) is kept as text. If the document has such a ``<`` but no
        markup at all, it is not XML and :class:`MarkupError` is raised.

        :param xml_text: the document, as str or UTF-8 bytes.

        :return: the stripped text.
        """
        text = _as_text(xml_text)
        pieces = []
        pos = 0
        first_stray = None
        found_markup = False
        while pos < len(text):
            start = text.find('<', pos)
            if start < 0:
                pieces.append(text[pos:])
                break
            pieces.append(text[pos:start])
            if _is_stray(text, start):
                if first_stray is None:
                    first_stray = start
                pieces.append('<')
                pos = start + 1
                continue
            end = self._strip_markup_at(text, start, pieces)
            if end is None:
                self.logger.warning(f"Unterminated markup at offset {start} of {len(text)}, "
                                    f"keeping the text before it")
                if self.keep_offsets:
                    pieces.append(_blank(text[start:]))
                break
            found_markup = True
            pos = end

        if first_stray is not None:
            if not found_markup:
                raise MarkupError(f"'<' at offset {first_stray} does not open a tag and the document "
                                  f"has no markup", offset=first_stray)
            self.logger.warning(f"'<' at offset {first_stray} does not open a tag, kept as text")
        return ''.join(pieces)

    def _strip_markup_at(self, text, start, pieces):
        """Consume the construct starting at ``start``; return its end, or None if unterminated."""
        if text.startswith('<![CDATA[', start):
            match = _CDATA.match(text, start)
            if match is None:
                return None
            if self.keep_offsets:
                pieces.append(_blank(text[start:match.start(1)]))
                pieces.append(match.group(1))
                pieces.append(_blank(text[match.end(1):match.end()]))
            else:
                pieces.append(match.group(1))
            return match.end()

        if text.startswith('<!--', start):
            match = _COMMENT.match(text, start)
        elif text.startswith('<!', start):
            match = _DECLARATION.match(text, start)
        elif text.startswith('<?', start):
            match = _PROCESSING_INSTRUCTION.match(text, start)
        elif text.startswith('</', start):
            match = _END_TAG.match(text, start)
        elif start + 1 == len(text):
            return None
        else:
            match = _START_TAG.match(text, start)
            if match is None:
                return None
            self._emit_start_tag(match, pieces)
            return match.end()

        if match is None:
            return None
        if self.keep_offsets:
            pieces.append(_blank(match.group()))
        return match.end()

    def _emit_start_tag(self, match, pieces):
        retained = []
        if match.group(1) in self.retain_tags:
            body_offset = match.start(2) - match.start()
            for attribute in _ATTRIBUTE.finditer(match.group(2)):
                if attribute.group(1) not in self.retain_attributes:
                    continue
                group = 2 if attribute.group(2) is not None else 3
                value = attribute.group(group)
                if value:
                    retained.append((body_offset + attribute.start(group), value))

        if not self.keep_offsets:
            for _, value in retained:
                if not _ends_with_space(pieces):
                    pieces.append(' ')
                pieces.append(value + ' ')
            return

        chars = list(_blank(match.group()))
        for offset, value in retained:
            chars[offset:offset + len(value)] = value
        pieces.append(''.join(chars))


def strip_markup(xml_text, retain_tags=(), retain_attributes=(), keep_offsets=False):
    """
    Strip all XML markup from ``xml_text``, keeping text content and the values of
    ``retain_attributes`` found on ``retain_tags``. See :class:`MarkupStripper`.
    """
    return MarkupStripper(retain_tags, retain_attributes, keep_offsets).strip(xml_text)


def check_well_formed(xml_text):
    """
    Report XML well-formedness problems in a document or fragment.

    The fragment is parsed strictly by lxml inside a synthetic root element, so documents
    with several top-level elements or bare text are accepted. A leading XML declaration
    and doctype are dropped first.

    :return: list of problem descriptions, empty when the document is well-formed.
    """
    body = _PROLOG.sub('', _as_text(xml_text), count=1)
    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)
    try:
        etree.fromstring(f'<{_FRAGMENT_ROOT}>{body}</{_FRAGMENT_ROOT}>', parser)
    except etree.XMLSyntaxError as e:
        problems = [f"line {entry.line}, column {entry.column}: {entry.message}" for entry in parser.error_log]
        return problems or [str(e)]
    return []
