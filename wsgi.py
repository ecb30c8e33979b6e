"""WSGI entry point, e.g. ``gunicorn wsgi:app``."""
from novel_extras import create_app

app = create_app()

if __name__ == '__main__':
    app.run(debug=True)
