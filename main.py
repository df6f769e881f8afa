"""
Main entry point script for PyJoyUI.

This script serves as the executable entry point when running
PyJoyUI from the command line.
"""

import sys
from pyjoyui.main import main

if __name__ == "__main__":
    sys.exit(main())
