#!/usr/bin/env python3
"""
File Rename Plus - Main Entry

Supports:
- GUI mode (default startup)
- CLI mode (--cli or -c parameter)

Usage:
    python main.py                          # GUI mode (default)
    python main.py --cli scan ./dir         # CLI command mode
    python main.py -c replace ./dir ...     # CLI command mode
    python main.py -c sequence ./dir ...    # CLI command mode
    python main.py -c recover ./dir         # CLI command mode
"""

import sys
from pathlib import Path

# Ensure the current directory is in the Python path
sys.path.insert(0, str(Path(__file__).parent))


def main():
    """Main entry point"""
    # Check if CLI should be started
    if "--cli" in sys.argv or "-c" in sys.argv[1:2]:
        # Remove --cli parameter
        args = [arg for arg in sys.argv[1:] if arg != "--cli"]
        if args and args[0] == "-c":
            args = args[1:]

        # CLI mode
        from cli import main as cli_main
        return cli_main(args)

    # Default to starting GUI
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
