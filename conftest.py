"""
Root conftest.py for pytest configuration.
Adds every package src directory under packages/ to the Python path.
"""
import sys
from pathlib import Path

# Get the project root directory
PROJECT_ROOT = Path(__file__).parent

packages_dir = PROJECT_ROOT / "packages"
if packages_dir.exists():
    for package_dir in sorted(packages_dir.iterdir()):
        if package_dir.is_dir():
            src_dir = package_dir / "src"
            if src_dir.exists():
                src_path = str(src_dir.absolute())
                if src_path not in sys.path:
                    sys.path.insert(0, src_path)
