import sys
from pathlib import Path

# Ensure the project root is first on sys.path so pytest uses this checkout's
# yorkescraper package and scripts rather than any installed copy.
_root = str(Path(__file__).parent)
if _root not in sys.path:
    sys.path.insert(0, _root)
