# productsvc/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

HOST = os.getenv("PRODUCTSVC_HOST", "0.0.0.0")
PORT = int(os.getenv("PRODUCTSVC_PORT", 8080))
LOG_LEVEL = os.getenv("PRODUCTSVC_LOG_LEVEL", "INFO").upper()
