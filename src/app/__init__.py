"""Streamlit study dashboard package."""

from pathlib import Path
import sys

# --- PYTHONPATH bootstrap ---
# Ensure repo root is on sys.path so `import src.*` works under `streamlit run`.
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))
# ---------------------------
