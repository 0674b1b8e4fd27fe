#!/usr/bin/env python3
"""
Test Catalog Generator for wdcaps

Scans tests/ for numbered tests (`# TEST###: description` above a test
function, or a `def test_###_name():` without the comment) and writes
TEST_CATALOG.md, one section per test module. Duplicate test numbers are
reported and make the script exit 1.
"""

import re
import sys
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List


TEST_DEF = re.compile(r"\s*def\s+(test_\w+)\s*\(")
NUMBERED_NAME = re.compile(r"test_(\d+)_")
TEST_COMMENT = re.compile(r"\s*#\s*TEST(\d+):\s*(.*)")


@dataclass
class TestInfo:
    """A numbered test"""
    number: int
    function_name: str
    description: str
    module: str
    line_number: int


def extract_tests(file_path: Path) -> List[TestInfo]:
    """Collect the numbered tests of one module"""
    tests = []
    number = None
    description = ""

    lines = file_path.read_text(encoding="utf-8").splitlines()
    for index, line in enumerate(lines):
        comment = TEST_COMMENT.match(line)
        if comment:
            number = int(comment.group(1))
            description = comment.group(2).strip()
            continue

        test_def = TEST_DEF.match(line)
        if not test_def:
            continue

        if number is None:
            numbered = NUMBERED_NAME.match(test_def.group(1))
            number = int(numbered.group(1)) if numbered else None
        if number is not None:
            tests.append(TestInfo(
                number=number,
                function_name=test_def.group(1),
                description=description,
                module=file_path.stem,
                line_number=index + 1,
            ))
        number = None
        description = ""

    return tests


def find_duplicates(tests: List[TestInfo]) -> Dict[int, List[TestInfo]]:
    by_number: Dict[int, List[TestInfo]] = defaultdict(list)
    for test in tests:
        by_number[test.number].append(test)
    return {number: found for number, found in by_number.items() if len(found) > 1}


def render_catalog(tests: List[TestInfo]) -> str:
    by_module: Dict[str, List[TestInfo]] = defaultdict(list)
    for test in tests:
        by_module[test.module].append(test)

    out = ["# wdcaps Test Catalog", "", f"**Total Tests:** {len(tests)}", ""]
    for module in sorted(by_module, key=lambda m: min(t.number for t in by_module[m])):
        out.append(f"## {module}")
        out.append("")
        out.append("| Test # | Function Name | Description | Line |")
        out.append("|--------|---------------|-------------|------|")
        for test in sorted(by_module[module], key=lambda t: t.number):
            description = test.description.replace("|", "\\|")
            out.append(
                f"| test{test.number:03d} | `{test.function_name}` | {description} | {test.line_number} |"
            )
        out.append("")
    return "\n".join(out)


def main() -> int:
    root = Path(__file__).parent
    tests_dir = root / "tests"
    if not tests_dir.exists():
        print(f"Error: {tests_dir} not found")
        return 1

    tests: List[TestInfo] = []
    for py_file in sorted(tests_dir.glob("test_*.py")):
        tests.extend(extract_tests(py_file))

    output_file = root / "TEST_CATALOG.md"
    output_file.write_text(render_catalog(tests), encoding="utf-8")
    print(f"Catalogued {len(tests)} tests in {output_file}")

    duplicates = find_duplicates(tests)
    for number, found in sorted(duplicates.items()):
        where = ", ".join(f"{t.module}:{t.line_number}" for t in found)
        print(f"Duplicate test number {number:03d}: {where}")
    return 1 if duplicates else 0


if __name__ == "__main__":
    sys.exit(main())
