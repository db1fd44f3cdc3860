"""
hchk - Settings Module
=======================

Values come from the environment. A .env file is loaded first when one is
found: config/.env.<HCHK_ENV> under the working directory (source
checkouts), otherwise the nearest .env in the working directory or its
parents. Variables already set in the environment are never overridden.

Usage:
    from hchk.settings import settings

    client = ApiClient(api_key, base_url=settings.HCHK_API_URL)
    if settings.is_test:
        ...
"""

import os
from pathlib import Path
from dotenv import find_dotenv, load_dotenv


DEFAULT_API_URL = 'https://healthchecks.io/api/v3/checks/'


class Settings:
    def __init__(self):
        self.ENV = os.getenv('HCHK_ENV', 'development')

        # Try config folder first, then the nearest .env
        env_file = Path.cwd() / 'config' / f'.env.{self.ENV}'
        if env_file.exists():
            self.ENV_FILE = str(env_file)
        else:
            self.ENV_FILE = find_dotenv('.env', usecwd=True) or None
        if self.ENV_FILE:
            load_dotenv(self.ENV_FILE)

        # API
        self.HCHK_API_URL = os.getenv('HCHK_API_URL', DEFAULT_API_URL)
        self.HCHK_TIMEOUT = float(os.getenv('HCHK_TIMEOUT', 30))

        # Credentials
        self.HCHK_API_KEY_ENV = os.getenv('HCHK_API_KEY_ENV', 'HCHK_API_KEY')
        self.HCHK_KEY_FILE = os.path.expanduser(os.getenv('HCHK_KEY_FILE', '~/.hchk'))

        # Logging
        self.LOG_LEVEL = os.getenv('LOG_LEVEL', 'WARNING')

    @property
    def is_production(self): return self.ENV == 'production'

    @property
    def is_development(self): return self.ENV == 'development'

    @property
    def is_test(self): return self.ENV == 'test'


settings = Settings()
