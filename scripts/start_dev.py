#!/usr/bin/env python3
"""
Development startup script.

Runs pre-flight checks, then starts the POS terminal in development mode.
"""

import os
import sys
import shutil
import subprocess
from pathlib import Path

# Project root
PROJECT_ROOT = Path(__file__).parent.parent


def check_dependencies():
    """Check if required dependencies are installed."""
    try:
        import fastapi
        import uvicorn
        import httpx
        import jwt
        import pydantic_settings
        print("✓ All core dependencies installed")
        return True
    except ImportError as e:
        print(f"✗ Missing dependency: {e.name}")
        print("\nRun: pip install -e .")
        return False


def check_env():
    """Check if .env file exists."""
    env_file = PROJECT_ROOT / ".env"
    env_example = PROJECT_ROOT / ".env.example"

    if env_file.exists():
        print("✓ Configuration file found")
        return True
    elif env_example.exists():
        print("! Configuration file not found, copying from example...")
        shutil.copy(env_example, env_file)
        print("✓ Created .env from example")
        print("  Please edit .env with your settings")
        return True
    else:
        print("✗ No configuration file found")
        return False


def check_backend():
    """Check that the POS backend answers its health check."""
    import httpx
    from dotenv import dotenv_values

    values = dotenv_values(PROJECT_ROOT / ".env")
    base_url = os.getenv("POS_BACKEND_BASE_URL") or values.get("POS_BACKEND_BASE_URL") or "http://localhost:5000"

    try:
        response = httpx.get(f"{base_url.rstrip('/')}/health", timeout=5.0)
        response.raise_for_status()
    except httpx.HTTPError as e:
        print(f"! Backend at {base_url} is not reachable: {e}")
        return False

    print(f"✓ Backend reachable at {base_url}")
    return True


def start_terminal():
    """Start the terminal with auto-reload."""
    print("\n☕ Starting POS Terminal on http://localhost:8080 ...")
    process = subprocess.Popen(
        [
            sys.executable, "-m", "uvicorn",
            "coffeepos.main:app",
            "--reload",
            "--host", "0.0.0.0",
            "--port", "8080",
        ],
        cwd=PROJECT_ROOT,
    )

    print("\n" + "=" * 60)
    print("📍 Terminal UI:  http://localhost:8080")
    print("📍 Terminal API: http://localhost:8080/docs")
    print("\nPress Ctrl+C to stop")
    print("=" * 60)

    try:
        process.wait()
    except KeyboardInterrupt:
        print("\n\nShutting down terminal...")
        process.terminate()
        process.wait()
        print("Terminal stopped.")


def main():
    print("=" * 60)
    print("CoffeePOS Terminal - Development Server")
    print("=" * 60)

    # Pre-flight checks
    print("\nRunning pre-flight checks...")

    if not check_dependencies():
        sys.exit(1)

    if not check_env():
        sys.exit(1)

    if not check_backend():
        response = input("\nStart anyway? [y/N]: ")
        if response.lower() != "y":
            sys.exit(1)

    print("\n✓ All checks passed!")

    start_terminal()


if __name__ == "__main__":
    main()
