# backend/wsgi.py
# Entry point for `flask --app wsgi` and for running the dev server directly.
import os

from dotenv import load_dotenv

load_dotenv()

from product_api import create_app  # noqa: E402
from product_api.extensions import db  # noqa: E402

app = create_app()

with app.app_context():
    db.create_all()


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.environ.get("PORT", app.config["PORT"])))
