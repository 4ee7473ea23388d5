import argparse
import sys

from ere_reader import env
from ere_reader.corpus_source import EREDocumentReader
from ere_reader.exceptions import EREReaderError
from ere_reader.logger_setup import LOG_LEVELS, setup_logging
from ere_reader.orchestrator import summarize_file_groups


def list_groups(args, logger):
    reader = EREDocumentReader(args.corpus_name or args.corpus_root, args.corpus_root, config_dir=args.config_dir,
                               required_file_extension=args.extension, claim_once=args.claim_once, logger=logger)
    summary = summarize_file_groups(reader.list_file_groups())
    if args.output_file:
        summary.to_csv(args.output_file, index=False)
        print(f"Wrote {len(summary)} file groups to {args.output_file}")
    else:
        print(summary.to_string(index=False))
    return 0


def strip_file(args, logger):
    reader = EREDocumentReader('cli', '.', config_dir=args.config_dir, keep_offsets=args.keep_offsets, logger=logger)
    with open(args.file, 'r', encoding=reader.encoding, newline='') as f:
        stripped = reader.strip_markup(f.read())
    if args.output_file:
        with open(args.output_file, 'w', encoding=reader.encoding, newline='') as f:
            f.write(stripped)
    else:
        sys.stdout.write(stripped)
    return 0


def main(argv=None):
    """
    Command-line interface for the ere-reader package.
    """
    parser = argparse.ArgumentParser(description='Pair ERE source and annotation files and strip source markup')

    config_group = parser.add_argument_group('Configuration Options')
    config_group.add_argument('--config-dir', type=str, default=env.ERE_READER_CONFIG_DIR,
                              help='Directory holding an ere_reader_config.json override')
    config_group.add_argument('--log-level', type=str.upper, choices=LOG_LEVELS, default=env.ERE_READER_LOG_LEVEL,
                              help='Logging level')
    config_group.add_argument('--log-file', type=str, default=env.ERE_READER_LOG_FILE, help='Optional log file')

    subparsers = parser.add_subparsers(dest='command', required=True)

    list_parser = subparsers.add_parser('list', help='List source files with their annotation files')
    list_parser.add_argument('corpus_root', help='Corpus root containing data/source/ and data/ere/')
    list_parser.add_argument('--corpus-name', type=str, help='Name of the corpus, defaults to the root path')
    list_parser.add_argument('--extension', '-e', type=str, help='Required file extension (default from config)')
    list_parser.add_argument('--no-claim-once', action='store_false', dest='claim_once', default=None,
                             help='Let every source file take every annotation file its stem prefixes')
    list_parser.add_argument('--output-file', '-o', type=str, help='Write the summary to this CSV file')
    list_parser.set_defaults(handler=list_groups)

    strip_parser = subparsers.add_parser('strip', help='Strip markup from one source document')
    strip_parser.add_argument('file', help='Source document')
    strip_parser.add_argument('--keep-offsets', action='store_true', default=None,
                              help='Blank markup with spaces so offsets are preserved')
    strip_parser.add_argument('--compact', action='store_false', dest='keep_offsets', default=None,
                              help='Remove markup entirely')
    strip_parser.add_argument('--output-file', '-o', type=str, help='Write the stripped text to this file')
    strip_parser.set_defaults(handler=strip_file)

    args = parser.parse_args(argv)
    try:
        logger = setup_logging('ere_reader', args.log_file, level=args.log_level)
    except ValueError as e:
        parser.error(str(e))

    try:
        return args.handler(args, logger)
    except (EREReaderError, OSError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
