#!/usr/bin/env python3
"""
Connection Test Script

Run this to verify the record store and email settings.
Usage: python scripts/test_connections.py
"""
import sys
sys.path.insert(0, '.')

from upiconnect.db.postgres import test_postgres_connection
from upiconnect.core.config import get_settings


def main():
    settings = get_settings()
    print("=" * 50)
    print("UPICONNECT - CONNECTION TEST")
    print("=" * 50)

    # Test record store
    print("\n[1] Testing database...")
    if settings.database_url:
        print("    URL: (from DATABASE_URL)")
    else:
        print(f"    URL: postgresql://{settings.postgres_user}:****@{settings.postgres_host}:{settings.postgres_port}/{settings.postgres_db}")
    if test_postgres_connection():
        print("    ✅ Database: CONNECTED")
    else:
        print("    ❌ Database: FAILED")

    # Resend (configuration only, nothing is sent)
    print("\n[2] Checking Resend configuration...")
    if settings.resend_api_key:
        print(f"    Base URL: {settings.resend_base_url}")
        print(f"    From: {settings.email_from}")
        print("    ✅ Resend: API key configured")
    else:
        print("    ⚠️  Resend: API key not configured (emails are only logged)")

    print("\n" + "=" * 50)
    print("Connection test complete!")
    print("=" * 50)


if __name__ == "__main__":
    main()
