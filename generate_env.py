#!/usr/bin/env python3
"""
Write the .env file read by app.py and create_app()

Generates a random SECRET_KEY and passwords for the critical `system` and
`admin` users, and writes every setting the application reads with its
default value.

Usage:
    python generate_env.py              # Refuses to overwrite an existing .env
    python generate_env.py --force      # Overwrite existing .env
    python generate_env.py --dev        # Fixed secret and passwords, HTTPS off
"""

import argparse
import secrets
import string
import sys
from pathlib import Path

from itam.data.core.user_info.password_validator import PasswordValidator

DEV_SECRET_KEY = "dev-secret-key-DO-NOT-USE-IN-PRODUCTION"
DEV_PASSWORD = "Admin987654321!"

# Characters that need no quoting in a .env value
PASSWORD_SPECIALS = "!@$%^&*()_+-[]{}|;.,<>?"


def generate_password(length=20):
    """Random password that satisfies PasswordValidator"""
    alphabet = string.ascii_letters + string.digits + PASSWORD_SPECIALS
    while True:
        password = ''.join(secrets.choice(alphabet) for _ in range(length))
        is_valid, _ = PasswordValidator.validate(password)
        if is_valid:
            return password


def build_settings(dev_mode=False):
    """
    Settings grouped by section, in the order they are written.

    Returns:
        list: (section title, [(key, value), ...]) pairs
    """
    https = 'False' if dev_mode else 'True'
    return [
        ("Flask", [
            ('SECRET_KEY', DEV_SECRET_KEY if dev_mode else secrets.token_hex(64)),
            ('FLASK_DEBUG', 'True' if dev_mode else 'False'),
            ('USE_RELOADER', 'False'),
            ('FLASK_HOST', '127.0.0.1'),
            ('FLASK_PORT', '5000'),
        ]),
        ("Database", [
            ('DATABASE_URL', 'sqlite:///itam.db'),
        ]),
        ("Critical users (see itam/build.py)", [
            ('SYSTEM_USER_PASSWORD', DEV_PASSWORD if dev_mode else generate_password()),
            ('ADMIN_USER_PASSWORD', DEV_PASSWORD if dev_mode else generate_password()),
        ]),
        ("HTTPS and cookies", [
            ('ENABLE_HTTPS', https),
            ('FORCE_HTTPS_REDIRECT', https),
            ('SESSION_COOKIE_SECURE', https),
            ('REMEMBER_COOKIE_SECURE', https),
            ('PERMANENT_SESSION_LIFETIME', '3600'),
            ('REMEMBER_COOKIE_DURATION', '86400'),
        ]),
        ("Rate limiting", [
            ('RATELIMIT_ENABLED', 'True'),
            ('RATELIMIT_DEFAULT', '200 per day;50 per hour'),
        ]),
        ("Asset queries and reports", [
            ('WARRANTY_EXPIRY_DAYS', '30'),
            ('DEFAULT_PAGE_SIZE', '20'),
            ('MAX_PAGE_SIZE', '100'),
        ]),
        ("Logging", [
            ('LOG_LEVEL', 'DEBUG' if dev_mode else 'INFO'),
            ('LOG_DIR', 'logs'),
        ]),
    ]


def render(settings, dev_mode=False):
    lines = ["# Generated by generate_env.py. Do not commit this file."]
    if dev_mode:
        lines.append("# DEVELOPMENT values: fixed secret and passwords, HTTPS disabled")
    for title, values in settings:
        lines.append("")
        lines.append(f"# {title}")
        lines.extend(f"{key}={value}" for key, value in values)
    return "\n".join(lines) + "\n"


def main():
    parser = argparse.ArgumentParser(description='Generate the .env file for the IT asset tracker')
    parser.add_argument('--force', action='store_true', help='Overwrite an existing .env')
    parser.add_argument('--dev', action='store_true', help='Development values (not for production)')
    parser.add_argument('--output', type=Path, default=Path(__file__).parent / '.env',
                        help='Target file (default: .env next to this script)')
    args = parser.parse_args()

    if args.output.exists() and not args.force:
        print(f"{args.output} already exists; use --force to overwrite it")
        return 1

    settings = build_settings(dev_mode=args.dev)
    args.output.write_text(render(settings, dev_mode=args.dev))
    args.output.chmod(0o600)

    print(f"Wrote {args.output}")
    print("The admin password is ADMIN_USER_PASSWORD in that file. Log in via POST /login,")
    print("then create further accounts with POST /api/users.")
    return 0


if __name__ == '__main__':
    sys.exit(main())
