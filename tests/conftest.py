import os
import sys

# The modules import each other by bare name, so put their directory on the path.
PACK_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'PACK'))
if PACK_DIR not in sys.path:
    sys.path.insert(0, PACK_DIR)
