#!/usr/bin/env python3
"""
Valheim Dedicated Server Launcher
"""

import sys
from valheim_launcher.cli import main

if __name__ == "__main__":
    sys.exit(main())
