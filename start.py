"""
Quick start script for local development.
"""
import subprocess
import sys

from app.core.config import settings


def main():
    """Starts the uvicorn server with the configured host and port."""
    print(f"{settings.APP_NAME} - Initialization\n")

    print(f"Starting FastAPI server on port {settings.PORT}...")
    print(f"Frontend UI:   http://localhost:{settings.PORT}")
    print(f"Documentation: http://localhost:{settings.PORT}/docs")
    print(f"Health check:  http://localhost:{settings.PORT}/health\n")

    command = [
        sys.executable, "-m", "uvicorn", "app.main:app",
        "--host", settings.HOST, "--port", str(settings.PORT),
    ]
    if settings.DEBUG:
        command.append("--reload")

    try:
        subprocess.run(command, check=True)
    except KeyboardInterrupt:
        print("\n\nServer stopped. Goodbye!")
    except subprocess.CalledProcessError as e:
        print(f"\nError starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
