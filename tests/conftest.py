#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Generates the import smoke tests for the hjm package before pytest collection.

import subprocess
import pytest
import sys
from pathlib import Path


def pytest_configure(config):
    """Run import test generator before pytest collection"""
    project_root = Path(__file__).parent.parent

    result = subprocess.run([
        sys.executable,
        str(project_root / "tests" / "import_test_generator.py"),
        "./hjm",
        "hjm"
    ], cwd=str(project_root))

    if result.returncode != 0:
        pytest.exit(f"Import test generation failed with code {result.returncode}")
