from smile_support import create_app

app = create_app()

if __name__ == "__main__":
    settings = app.config["CONTACT_SETTINGS"]
    # Development: 3001 (the Vite dev server proxies /api here), production: 3000
    app.run(host="127.0.0.1", port=settings.port, debug=False, use_reloader=False)

# --- LOCAL ---
# cp .env.example .env   # fill GMAIL_USER / GMAIL_APP_PASSWORD, optionally RECAPTCHA_SECRET_KEY
# poetry run python run.py
# poetry run flask --app smile_support:create_app --debug run --port 3001
