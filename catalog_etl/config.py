import os
from dotenv import load_dotenv

# Load .env if present
load_dotenv()

# Stores
SOURCE_DB = os.getenv("CATALOG_SOURCE_DB", "data.db")
SINK_DB = os.getenv("CATALOG_SINK_DB", "catalog.db")

# "abort" stops the run on the first bad course, "skip" logs it and moves on
ON_ERROR = os.getenv("CATALOG_ON_ERROR", "abort")
ON_ERROR_CHOICES = ("abort", "skip")

LOG_LEVEL = os.getenv("CATALOG_LOG_LEVEL", "INFO")
