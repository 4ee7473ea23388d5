import os
from dotenv import load_dotenv

load_dotenv()  # take environment variables from .env.

ERE_READER_CONFIG_DIR: str = os.getenv("ERE_READER_CONFIG_DIR")
ERE_READER_LOG_FILE: str = os.getenv("ERE_READER_LOG_FILE")
ERE_READER_LOG_LEVEL: str = os.getenv("ERE_READER_LOG_LEVEL", "INFO")
