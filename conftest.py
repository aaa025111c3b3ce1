import os
import tempfile
from pathlib import Path

# Point the settings singleton at a throwaway file before the package is imported
_test_dir = Path(tempfile.mkdtemp(prefix='retail_ordering_tests_'))
_settings = _test_dir / 'settings.ini'
_settings.write_text(
    "[DATABASE]\n"
    "url = sqlite://\n"
    "echo = False\n"
    "\n"
    "[LOGGING]\n"
    "level = DEBUG\n"
    f"directory = {_test_dir / 'logs'}\n"
    "console_output = False\n"
    "\n"
    "[BUSINESS_RULES]\n"
    "eligibility_radius = 30.0\n"
    "recent_orders_limit = 5\n"
    "recent_updates_limit = 5\n"
    "popular_items_limit = 5\n"
    "popular_customers_limit = 5\n"
)
os.environ['RETAIL_ORDERING_CONFIG'] = str(_settings)
