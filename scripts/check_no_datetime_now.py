#!/usr/bin/env python3
"""Pre-commit hook to prevent direct datetime.now() calls in production code.

Every service reads time from an injected TimeAuthorityProtocol so that
effective dates and status projections are deterministic under test.

This script scans ringside/ for direct datetime.now() or datetime.utcnow()
calls and fails if any are found, excluding SystemTimeAuthority itself.

Usage:
    python scripts/check_no_datetime_now.py [package_directory]

Exit codes:
    0: No violations found
    1: Violations found - datetime.now() detected in production code
"""

import re
import sys
from pathlib import Path

# Matches: datetime.now(), datetime.utcnow()
DATETIME_NOW_PATTERN = re.compile(r"datetime\s*\.\s*(now|utcnow)\s*\(", re.MULTILINE)

# The only production file allowed to read the wall clock
ALLOWED_FILES = {
    "ringside/application/services/time_authority_service.py",
}


def check_file(file_path: Path) -> list[tuple[int, str]]:
    """Check a single file for datetime.now() violations.

    Returns:
        List of (line_number, line_content) tuples for violations.
    """
    violations: list[tuple[int, str]] = []

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return violations

    for line_num, line in enumerate(content.splitlines(), start=1):
        if line.lstrip().startswith("#"):
            continue
        if DATETIME_NOW_PATTERN.search(line):
            violations.append((line_num, line.strip()))

    return violations


def find_violations(package_path: Path) -> dict[str, list[tuple[int, str]]]:
    """Scan a package directory, keyed by path relative to its parent."""
    all_violations: dict[str, list[tuple[int, str]]] = {}
    for py_file in package_path.rglob("*.py"):
        relative_path = py_file.relative_to(package_path.parent).as_posix()
        if relative_path in ALLOWED_FILES:
            continue
        violations = check_file(py_file)
        if violations:
            all_violations[relative_path] = violations
    return all_violations


def main() -> int:
    """Main entry point for the pre-commit hook.

    Returns:
        Exit code: 0 for success, 1 for violations found.
    """
    package_path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("ringside")

    if not package_path.exists():
        print(f"Warning: {package_path}/ directory not found, skipping check")
        return 0

    all_violations = find_violations(package_path)

    if not all_violations:
        print(f"No datetime.now() violations found in {package_path}/")
        return 0

    print("Direct datetime.now() calls detected!")
    print()
    for file_path, violations in sorted(all_violations.items()):
        print(f"  {file_path}:")
        for line_num, line_content in violations:
            print(f"    Line {line_num}: {line_content}")
        print()

    print("How to fix:")
    print("  1. Inject TimeAuthorityProtocol in your service constructor")
    print("  2. Use self._time.now() instead of datetime.now()")
    return 1


if __name__ == "__main__":
    sys.exit(main())
