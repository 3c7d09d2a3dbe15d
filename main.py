from catalog import create_app
import os

app = create_app()

if __name__ == "__main__":
    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "8000"))
    debug = os.getenv("DEBUG", "false").lower() == "true"
    try:
        app.run(host=host, port=port, debug=debug)
    finally:
        app.extensions["catalog_db"].close()
