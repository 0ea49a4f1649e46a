"""
Entry point for Vector Ink

Run this script to render a stored canvas:
    python run.py <canvas-id> <output.png>
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

# Import and run main
from vector_ink.main import main

if __name__ == "__main__":
    sys.exit(main())
