"""Delete expired verification tokens and password reset pins."""

from app import create_app
from models import db
from services.account_service import AccountService


def main() -> None:
    app = create_app()
    with app.app_context():
        tokens, pins = AccountService.from_app(db.session).purge_expired()
        print(f"Purged {tokens} verification token(s) and {pins} reset pin(s).")


if __name__ == "__main__":
    main()
