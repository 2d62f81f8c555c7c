#!/usr/bin/env python3
"""
Batch Renaming Tool - Remove Text - Main Entry

Supports:
- GUI mode (default startup)
- CLI mode (--cli or -c parameter)

Usage:
    python main.py                          # GUI mode (default)
    python main.py --cli                    # CLI interactive mode
    python main.py -c preview a.txt -t a    # CLI command mode
    python main.py -c remove ./dir -t _copy # CLI command mode
"""

import sys


def main():
    """Main entry point"""
    if "--cli" in sys.argv or "-c" in sys.argv:
        argv = [arg for arg in sys.argv[1:] if arg not in ("--cli", "-c")]

        from cli import main as cli_main
        return cli_main(argv)

    try:
        from gui import main as gui_main
    except ImportError as e:
        print("Error: Unable to start GUI, please ensure PySide6 is installed")
        print(f"Detailed error: {e}")
        print("\nInstall command: pip install PySide6")
        print("\nTo use CLI mode, run:")
        print("    python main.py --cli")
        print("or  python main.py -c")
        return 1
    return gui_main()


if __name__ == "__main__":
    sys.exit(main())
