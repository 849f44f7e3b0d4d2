from decouple import config

# Reload app during development
RELOAD = config('SOUNDWAVE_RELOAD', default=False, cast=bool)

# Database Configuration
DB_PATH = config('SOUNDWAVE_DB_PATH', default='soundwave.db')

# API Server Configuration
API_HOST = config('SOUNDWAVE_API_HOST', default='127.0.0.1')
API_PORT = config('SOUNDWAVE_API_PORT', default=8765, cast=int)

# Owner used for playlists when a request carries no X-User-Id header
DEFAULT_USER = config('SOUNDWAVE_DEFAULT_USER', default='local')

# Playback Configuration
SKIP_BACK_THRESHOLD = config('SOUNDWAVE_SKIP_BACK_THRESHOLD', default=3.0, cast=float)  # seconds
DEFAULT_VOLUME = config('SOUNDWAVE_DEFAULT_VOLUME', default=0.8, cast=float)  # 0.0 - 1.0

# YouTube Data API (track resolution)
YOUTUBE_API_KEY = config('YOUTUBE_API_KEY', default='')
YOUTUBE_SEARCH_URL = config('YOUTUBE_SEARCH_URL', default='https://www.googleapis.com/youtube/v3/search')
YOUTUBE_TIMEOUT = config('YOUTUBE_TIMEOUT', default=10.0, cast=float)  # seconds

# Logging Configuration
LOG_LEVEL = config('LOG_LEVEL', default='INFO')
LOG_FILE = config('LOG_FILE', default=None)
