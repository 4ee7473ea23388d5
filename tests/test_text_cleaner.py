import pytest

from ere_reader.exceptions import MarkupError
from ere_reader.text_cleaner import MarkupStripper, strip_markup, check_well_formed


def test_strip_removes_all_tags():
    assert strip_markup("<doc><p>Hello</p></doc>") == "Hello"


def test_strip_keeps_retained_attribute_before_text():
    result = strip_markup('<post author="alice">Hi there</post>', retain_tags={'post'}, retain_attributes={'author'})
    assert result == "alice Hi there"
    assert result.index("alice") < result.index("Hi there")


def test_strip_drops_attributes_not_retained():
    result = strip_markup('<post author="alice" id="99">text</post>', retain_tags={'post'},
                          retain_attributes={'author'})
    assert "99" not in result
    assert "alice" in result
    assert "text" in result


def test_strip_drops_attributes_of_tags_not_retained():
    result = strip_markup('<doc author="bob">text</doc>', retain_tags={'post'}, retain_attributes={'author'})
    assert result == "text"


def test_strip_plain_text_unchanged():
    text = "No markup here, just a > sign & an ampersand.\nSecond line."
    assert strip_markup(text) == text
    assert strip_markup(text, keep_offsets=True) == text


def test_strip_keeps_entities_undecoded():
    assert strip_markup("<p>Q&amp;A</p>") == "Q&amp;A"


def test_strip_single_quoted_and_multiple_attributes_in_order():
    stripper = MarkupStripper(retain_tags=['quote'], retain_attributes=['orig_author', 'author'])
    result = stripper.strip("<quote author='x' orig_author=\"y\">said</quote>")
    assert result == "x y said"


def test_strip_self_closing_retained_tag():
    result = strip_markup('before<post author="carol"/>after', retain_tags={'post'}, retain_attributes={'author'})
    assert result == "before carol after"
    assert result.split() == ["before", "carol", "after"]


def test_keep_offsets_preserves_length_and_positions():
    original = '<post author="alice" id="99">Hi there</post>'
    result = strip_markup(original, retain_tags={'post'}, retain_attributes={'author'}, keep_offsets=True)
    assert len(result) == len(original)
    assert result[original.index("alice"):original.index("alice") + 5] == "alice"
    assert result[original.index("Hi there"):original.index("Hi there") + 8] == "Hi there"
    assert "99" not in result
    assert result.strip() == "alice" + " " * (len('" id="99">')) + "Hi there"


def test_keep_offsets_keeps_newlines_inside_markup():
    original = '<doc\n id="1">\ntext\n</doc>'
    result = strip_markup(original, keep_offsets=True)
    assert result == '    \n' + ' ' * 8 + '\ntext\n' + ' ' * 6


def test_comments_cdata_and_declarations():
    original = '<?xml version="1.0"?><!DOCTYPE doc><doc><!-- note <b> --><![CDATA[a < b]]></doc>'
    assert strip_markup(original) == "a < b"
    result = strip_markup(original, keep_offsets=True)
    assert len(result) == len(original)
    assert result.index("a < b") == original.index("a < b")


def test_unterminated_tag_keeps_prefix():
    assert strip_markup('<doc>Some text <post author="x') == "Some text "
    result = strip_markup('<doc>Some text <post author="x', keep_offsets=True)
    assert result == "     Some text " + " " * len('<post author="x')


def test_unterminated_comment_keeps_prefix():
    assert strip_markup("<p>kept</p><!-- never closed") == "kept"


def test_unclosed_elements_are_tolerated():
    assert strip_markup("<doc><p>one<p>two") == "onetwo"


def test_stray_less_than_kept_as_text():
    assert strip_markup("<p>a < b</p>") == "a < b"
    original = "<p>a < b</p>"
    result = strip_markup(original, keep_offsets=True)
    assert len(result) == len(original)
    assert result.index("a < b") == original.index("a < b")


def test_stray_less_than_without_markup_raises():
    with pytest.raises(MarkupError) as excinfo:
        strip_markup("1 < 2 < 3")
    assert excinfo.value.offset == 2


def test_markup_error_is_value_error():
    with pytest.raises(ValueError):
        strip_markup("<>")


def test_bytes_input():
    assert strip_markup("<p>café</p>".encode('utf-8')) == "café"
    with pytest.raises(MarkupError):
        strip_markup(b"<p>\xff\xfe</p>")


def test_string_whitelist_rejected():
    with pytest.raises(ValueError):
        MarkupStripper(retain_tags='post')


def test_whitelists_are_frozen():
    tags = ['post']
    stripper = MarkupStripper(retain_tags=tags, retain_attributes=['author'])
    tags.append('doc')
    assert stripper.retain_tags == frozenset({'post'})


def test_check_well_formed():
    assert check_well_formed('<?xml version="1.0"?>\n<doc><p>ok</p></doc>') == []
    assert check_well_formed("text <a>with</a> <b>several</b> roots") == []
    problems = check_well_formed("<doc><p>unclosed</doc>")
    assert len(problems) > 0
    assert all(isinstance(p, str) for p in problems)


def test_check_well_formed_reports_each_document_alone():
    first = check_well_formed('<doc>x\x0cy</doc>')
    second = check_well_formed('<doc>x\x0cy</doc>')
    assert len(first) == 1
    assert first == second
    assert check_well_formed('<doc>fine</doc>') == []


def test_compact_value_separated_from_surrounding_text():
    stripper = MarkupStripper(retain_tags=['quote'], retain_attributes=['orig_author'])
    result = stripper.strip('said<quote orig_author="bob">yes</quote>')
    assert result == "said bob yes"
    assert stripper.strip('said\n<quote orig_author="bob">yes</quote>') == "said\nbob yes"
