import os

from dotenv import load_dotenv

load_dotenv()

DISCORD_TOKEN = os.getenv('DISCORD_TOKEN')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

DATA_DIR = os.getenv('DATA_DIR', os.path.join(os.path.dirname(__file__), 'data'))
BALANCES_FILE = os.path.join(DATA_DIR, 'balances.json')
INVENTORY_FILE = os.path.join(DATA_DIR, 'inventory.json')
LOOTBOXES_FILE = os.path.join(DATA_DIR, 'lootboxes.json')
ADMINS_FILE = os.path.join(DATA_DIR, 'admins.json')
SETTINGS_FILE = os.path.join(DATA_DIR, 'settings.json')

# Price simulation
TICK_SECONDS = float(os.getenv('TICK_SECONDS', '5'))
HISTORY_CAPACITY = int(os.getenv('HISTORY_CAPACITY', '10000'))
START_PRICE = float(os.getenv('START_PRICE', '100'))

# Graph display
GRAPH_WIDTH = int(os.getenv('GRAPH_WIDTH', '50'))
GRAPH_HEIGHT = int(os.getenv('GRAPH_HEIGHT', '20'))
REFRESH_SECONDS = float(os.getenv('REFRESH_SECONDS', '5'))
DEFAULT_RANGE_SECONDS = int(os.getenv('DEFAULT_RANGE_SECONDS', '3600'))
MAX_RANGE_SECONDS = int(os.getenv('MAX_RANGE_SECONDS', '43200'))

# Comma separated user ids that are always admins
ADMIN_IDS = {s.strip() for s in os.getenv('ADMIN_IDS', '').split(',') if s.strip()}
