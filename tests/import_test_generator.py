#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Generates pytest code that imports every module of a package and checks the names each module imports
# at module level are available on it.

import argparse
import ast
import logging
import os
from pathlib import Path
from typing import Dict, Set

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class ImportAnalyzer:
    def __init__(self, package_root: str, package_name: str):
        self.package_root = Path(package_root)
        self.package_name = package_name
        self.exports: Dict[str, Set[str]] = {}

    def module_name(self, file_path: Path) -> str:
        relative_path = file_path.relative_to(self.package_root).with_suffix('')
        parts = [self.package_name] + list(relative_path.parts)
        if parts[-1] == '__init__':
            parts = parts[:-1]
        return '.'.join(parts)

    def analyze_file(self, file_path: Path) -> None:
        """Collect the names bound by module-level 'from ... import ...' statements."""
        module_name = self.module_name(file_path)
        with open(file_path, encoding='utf-8') as f:
            content = f.read()

        try:
            tree = ast.parse(content)
        except SyntaxError as e:
            logger.warning(f"Syntax error in {file_path}: {e}")
            return

        exports = set()
        for node in tree.body:
            if isinstance(node, ast.ImportFrom) and node.module != '__future__':
                for name in node.names:
                    if name.name != '*':
                        exports.add(name.asname or name.name)

        self.exports[module_name] = exports
        logger.info(f"Analyzed {module_name}: {sorted(exports)}")

    def scan_package(self) -> None:
        for file_path in sorted(self.package_root.rglob('*.py')):
            if '__pycache__' not in file_path.parts:
                self.analyze_file(file_path)

    def generate_import_tests(self) -> str:
        test_code = [
            "import pytest",
            "import importlib",
            "",
            "# Auto-generated import tests",
            "",
            "@pytest.mark.parametrize('module_path', [",
        ]
        for module_name in sorted(self.exports.keys()):
            test_code.append(f"    '{module_name}',")

        test_code.extend([
            "])",
            "def test_module_imports(module_path):",
            '    """Test that each module can be imported."""',
            "    importlib.import_module(module_path)",
            "",
            "@pytest.mark.parametrize('module_path,name', [",
        ])
        for module_name, exports in sorted(self.exports.items()):
            for export in sorted(exports):
                test_code.append(f"    ('{module_name}', '{export}'),")

        test_code.extend([
            "])",
            "def test_specific_imports(module_path, name):",
            '    """Test that specific names can be imported from modules."""',
            "    module = importlib.import_module(module_path)",
            "    assert hasattr(module, name), f'{module_path} is missing export {name}'",
            "",
        ])
        return "\n".join(test_code)


def main():
    parser = argparse.ArgumentParser(description='Generate import tests for a Python package')
    parser.add_argument('package_root', nargs='?', default='./hjm', help='Root directory of the package')
    parser.add_argument('package_name', nargs='?', default='hjm', help='Name of the package')
    parser.add_argument('--output-dir', default=os.path.join('tests', 'integration'))
    args = parser.parse_args()

    analyzer = ImportAnalyzer(args.package_root, args.package_name)
    analyzer.scan_package()

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / 'test_imports.py'
    with open(output_file, 'w', encoding='utf-8') as f:
        f.write(analyzer.generate_import_tests())

    logger.info(f"Generated import tests in {output_file}")


if __name__ == '__main__':
    main()
