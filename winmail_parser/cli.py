# ============================================================================
# winmail_parser/cli.py - CLI
# ============================================================================

import argparse
import json
import logging
import re
from pathlib import Path
from typing import List, Optional

from . import create_tnef_parser
from .config import config
from .models import TnefAttachment

_UNSAFE_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def safe_filename(name: str) -> str:
    """Strip path components and characters that are unsafe on common filesystems."""
    cleaned = _UNSAFE_CHARS.sub("_", name).strip(" .")
    return cleaned or "attachment"


def extract_attachments(attachments: List[TnefAttachment], target_dir: Path) -> List[Path]:
    """Write attachments into ``target_dir``; duplicate names get a numeric suffix."""
    target_dir.mkdir(parents=True, exist_ok=True)
    written = []
    used = set()
    for attachment in attachments:
        name = safe_filename(attachment.name)
        stem, dot, suffix = name.rpartition(".")
        if not dot:
            stem, suffix = name, ""
        candidate = name
        counter = 1
        while candidate.lower() in used or (target_dir / candidate).exists():
            candidate = f"{stem} ({counter}){dot}{suffix}"
            counter += 1
        used.add(candidate.lower())
        path = target_dir / candidate
        path.write_bytes(attachment.data)
        written.append(path)
    return written


def main(argv: Optional[List[str]] = None) -> int:
    """Command line interface for the winmail.dat decoder."""
    parser = argparse.ArgumentParser(
        description="Decode TNEF (winmail.dat) files: subject, sender, body and attachments",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print the decoded message as JSON:
  python -m winmail_parser winmail.dat

  # Save every attachment into ./out:
  python -m winmail_parser winmail.dat --extract-dir out

  # Human readable summary, HTML body rendered as text:
  python -m winmail_parser winmail.dat --text
        """
    )
    parser.add_argument("file", type=Path, help="Input TNEF file (winmail.dat)")
    parser.add_argument("--log-level", type=str, default=config.DEFAULT_LOG_LEVEL,
                        choices=config.VALID_LOG_LEVELS,
                        help="Set logging level")
    parser.add_argument("--output", type=Path, help="Output JSON file")
    parser.add_argument("--extract-dir", type=Path,
                        help="Directory to write attachments into")
    parser.add_argument("--include-data", action="store_true", default=config.DEFAULT_INCLUDE_DATA,
                        help="Include base64 attachment data in the JSON output")
    parser.add_argument("--text", action="store_true",
                        help="Print a plain text summary instead of JSON")
    args = parser.parse_args(argv)

    log_level = getattr(logging, args.log_level.upper())
    winmail_parser = create_tnef_parser(log_level=log_level)

    try:
        data = args.file.read_bytes()
    except OSError as e:
        print(f"Error: {e}")
        return 1

    result, summary = winmail_parser.decode(data, args.file.name, include_data=args.include_data)
    if result is None:
        print(json.dumps(summary, indent=2, default=str))
        return 1

    if args.extract_dir:
        for path in extract_attachments(result.attachments, args.extract_dir):
            print(f"Extracted: {path}")

    if args.text:
        print(f"Subject: {result.subject}")
        print(f"From: {result.sender}")
        if result.date_sent:
            print(f"Date: {result.date_sent.isoformat()}")
        for attachment in result.attachments:
            print(f"Attachment: {attachment.name} ({attachment.size} bytes, {attachment.mime_type})")
        print()
        print(winmail_parser.body_text(result))
        return 0

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            json.dump(summary, f, indent=2, default=str, ensure_ascii=False)
        print(f"Results saved to: {args.output}")
    elif not args.extract_dir:
        print(json.dumps(summary, indent=2, default=str, ensure_ascii=False))

    return 0


if __name__ == "__main__":  # pragma: no cover
    import sys
    sys.exit(main())
