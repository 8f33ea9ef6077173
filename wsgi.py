"""
WSGI entry point, used by gunicorn (`gunicorn wsgi:app`).
"""
from creatorfit import create_app

app = create_app()

if __name__ == '__main__':
    from creatorfit.config import PORT
    app.run(host='0.0.0.0', port=PORT)
