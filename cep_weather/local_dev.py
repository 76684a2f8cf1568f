"""
Local development server for the CEP weather service.
Run this from the root directory: python -m cep_weather.local_dev
"""

import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

root_dir = Path(__file__).parent.parent


def main() -> None:
    env_file = root_dir / ".env"
    if env_file.exists():
        load_dotenv(env_file)
        print(f"Loaded environment variables from {env_file}")
    else:
        print("No .env file found. Using .env.example as reference.")

    port = int(os.getenv("PORT", "8080"))
    print("Starting CEP Weather Service...")
    print(f"API Documentation: http://localhost:{port}/docs")

    uvicorn.run(
        "cep_weather.app:create_app",
        factory=True,
        host="0.0.0.0",
        port=port,
        reload=True,
        log_level="info",
    )


if __name__ == "__main__":
    main()
