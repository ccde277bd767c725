from mangum import Mangum
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.config import get_settings
from core.logging import setup_logging
from ledger.api import create_app

setup_logging(get_settings())

app = create_app(root_path="/api")

handler = Mangum(app)
