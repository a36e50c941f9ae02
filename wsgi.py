"""
MediClarity entry point

    FLASK_ENV=production gunicorn wsgi:app
    python wsgi.py
"""
import os

from dotenv import load_dotenv

load_dotenv()

from app import create_app  # noqa: E402

app = create_app(os.environ.get("FLASK_ENV", "default"))

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=app.config["PORT"], threaded=True)
