#!/usr/bin/env python3
"""
Launch the Baby Brain Inspector

Usage:
    python run_dashboard.py [brain_path]
"""

import sys

from gui.inspector import main as inspector_main


def main():
    if len(sys.argv) > 1:
        return inspector_main(sys.argv[1])
    return inspector_main()


if __name__ == '__main__':
    sys.exit(main())
