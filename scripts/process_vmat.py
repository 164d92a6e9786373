#!/usr/bin/env python3
"""
Run the VMAT manifest CLI from a source checkout.

    python scripts/process_vmat.py process D:/content/addon
"""

import sys
from pathlib import Path

# vmat_manifest lives next to this file; make it importable without pip install
package_parent = Path(__file__).resolve().parent
if str(package_parent) not in sys.path:
    sys.path.insert(0, str(package_parent))

from vmat_manifest.cli import app

if __name__ == "__main__":
    app()
