import os
import configparser
import urllib.parse
from pathlib import Path

class Config:
    """Configuration manager for the Retail Ordering System."""

    _instance = None

    def __new__(cls):
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super(Config, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize the configuration if not already initialized."""
        if self._initialized:
            return

        self._config_path = Path(os.getenv('RETAIL_ORDERING_CONFIG', Path('config') / 'settings.ini'))
        self._config_dir = self._config_path.parent
        self._config = configparser.ConfigParser(interpolation=None)

        # Load config or create default
        if self._config_path.exists():
            self._config.read(self._config_path)
        else:
            self._create_default_config()

        self._initialized = True

    def _create_default_config(self):
        """Create default configuration file."""
        self._config['DATABASE'] = {
            'engine': 'postgresql',
            'host': 'localhost',
            'port': '5432',
            'database': 'retail',
            'username': 'postgres',
            'password': 'postgres',
            'echo': 'False'
        }

        self._config['LOGGING'] = {
            'level': 'INFO',
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            'directory': 'logs',
            'max_size_mb': '10',
            'backup_count': '5',
            'console_output': 'False'
        }

        self._config['BUSINESS_RULES'] = {
            'eligibility_radius': '30.0',
            'recent_orders_limit': '5',
            'recent_updates_limit': '5',
            'popular_items_limit': '5',
            'popular_customers_limit': '5'
        }

        self._save_config()

    def _save_config(self):
        """Save configuration to file."""
        # Create config directory if it doesn't exist
        if not self._config_dir.exists():
            self._config_dir.mkdir(parents=True)

        with open(self._config_path, 'w') as configfile:
            self._config.write(configfile)

    def reload(self, config_path=None):
        """Re-read the settings file, optionally from another location."""
        if config_path is not None:
            self._config_path = Path(config_path)
            self._config_dir = self._config_path.parent

        self._config = configparser.ConfigParser(interpolation=None)
        self._config.read(self._config_path)

    def get(self, section, key, default=None):
        """Get configuration value."""
        try:
            return self._config.get(section, key)
        except (configparser.NoSectionError, configparser.NoOptionError):
            return default

    def get_int(self, section, key, default=None):
        """Get configuration value as integer."""
        try:
            return self._config.getint(section, key)
        except (configparser.NoSectionError, configparser.NoOptionError, ValueError):
            return default

    def get_float(self, section, key, default=None):
        """Get configuration value as float."""
        try:
            return self._config.getfloat(section, key)
        except (configparser.NoSectionError, configparser.NoOptionError, ValueError):
            return default

    def get_boolean(self, section, key, default=None):
        """Get configuration value as boolean."""
        try:
            return self._config.getboolean(section, key)
        except (configparser.NoSectionError, configparser.NoOptionError, ValueError):
            return default

    def set(self, section, key, value):
        """Set configuration value."""
        if not self._config.has_section(section):
            self._config.add_section(section)

        self._config.set(section, key, str(value))
        self._save_config()

    def get_db_url(self):
        """Generate SQLAlchemy database URL.

        A full ``url`` in the DATABASE section wins over the individual parts.
        """
        url = self.get('DATABASE', 'url')
        if url:
            return url

        engine = self.get('DATABASE', 'engine', 'postgresql')
        username = self.get('DATABASE', 'username', 'postgres')
        password = self.get('DATABASE', 'password', 'postgres')
        host = self.get('DATABASE', 'host', 'localhost')
        port = self.get('DATABASE', 'port', '5432')
        database = self.get('DATABASE', 'database', 'retail')

        # URL encode the password to handle special characters
        password = urllib.parse.quote_plus(password)

        return f"{engine}://{username}:{password}@{host}:{port}/{database}"

    @property
    def log_config(self):
        """Get logging configuration."""
        return {
            'level': self.get('LOGGING', 'level', 'INFO'),
            'format': self.get('LOGGING', 'format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s'),
            'directory': self.get('LOGGING', 'directory', 'logs'),
            'max_size_mb': self.get_int('LOGGING', 'max_size_mb', 10),
            'backup_count': self.get_int('LOGGING', 'backup_count', 5),
            'console_output': self.get_boolean('LOGGING', 'console_output', False)
        }

    @property
    def business_rules(self):
        """Get business rules configuration."""
        return {
            'eligibility_radius': self.get_float('BUSINESS_RULES', 'eligibility_radius', 30.0),
            'recent_orders_limit': self.get_int('BUSINESS_RULES', 'recent_orders_limit', 5),
            'recent_updates_limit': self.get_int('BUSINESS_RULES', 'recent_updates_limit', 5),
            'popular_items_limit': self.get_int('BUSINESS_RULES', 'popular_items_limit', 5),
            'popular_customers_limit': self.get_int('BUSINESS_RULES', 'popular_customers_limit', 5)
        }

# Global config instance
config = Config()
