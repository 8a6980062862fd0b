"""
Run the CryptoDash engine server.
"""
import os

# Load environment
from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), ".env"))

# Run uvicorn
import uvicorn

from cryptodash.core.config import settings

if __name__ == "__main__":
    print(f"Starting {settings.app_name}...")
    print(f"API Docs: http://localhost:{settings.port}/docs")
    print("-" * 50)

    uvicorn.run(
        "cryptodash.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
