"""Development server: ``python -m photovault``."""
from photovault import create_app

app = create_app()

if __name__ == "__main__":
    app.logger.info("Server is running on http://localhost:%s", app.config["PORT"])
    app.run(host="0.0.0.0", port=app.config["PORT"])
