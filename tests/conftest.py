import os
import sys
from pathlib import Path

os.environ.setdefault("MPLBACKEND", "Agg")

# Add repo root to path
ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))
