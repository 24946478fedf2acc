#!/usr/bin/env python3
"""
APIC Product Lifecycle Tool.

Publishes, supersedes, replaces, deprecates or retires an API product on
IBM API Connect, driven by the ACTION and related variables of an
environment file (apic_inputs.env by default).
"""

import sys
from apic_lifecycle.main_app import main


if __name__ == "__main__":
    sys.exit(main())
