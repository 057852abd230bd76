#!/usr/bin/env python3
"""
Onboarding - CLI Entry Point

Run with:
    python -m onboarding
    onboarding

Or from the desktop session's autostart on every login; after the first
completed run it hands straight off to the main application.
"""

import sys
from .cli import main

if __name__ == "__main__":
    sys.exit(main())
