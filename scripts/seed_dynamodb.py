"""Create the ShiftPay DynamoDB tables and optionally register a location.

Usage:
    python scripts/seed_dynamodb.py --endpoint-url http://localhost:4566
    python scripts/seed_dynamodb.py --table-suffix -dev --account mycafe --token 123:abc
"""

from __future__ import annotations

import argparse
from typing import Any

import boto3

TABLE_NAMES: list[str] = [
    "shiftpay-locations",
    "shiftpay-salary-reports",
    "shiftpay-inventory-results",
]


def create_tables(ddb: Any, suffix: str = "") -> list[str]:
    """Create the PK/SK tables; existing ones are skipped. Returns created names."""
    client = ddb.meta.client
    existing = client.list_tables().get("TableNames", [])
    created: list[str] = []

    for name in TABLE_NAMES:
        table_name = f"{name}{suffix}"
        if table_name in existing:
            print(f"  Table {table_name} already exists, skipping")
            continue
        client.create_table(
            TableName=table_name,
            KeySchema=[
                {"AttributeName": "PK", "KeyType": "HASH"},
                {"AttributeName": "SK", "KeyType": "RANGE"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "PK", "AttributeType": "S"},
                {"AttributeName": "SK", "AttributeType": "S"},
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        created.append(table_name)
        print(f"  Created table {table_name}")
    return created


def seed_location(ddb: Any, account: str, name: str, access_token: str, suffix: str = "") -> None:
    """Register a Poster account the same way the OAuth connect flow does."""
    ddb.Table(f"shiftpay-locations{suffix}").put_item(Item={
        "PK": f"LOCATION#{account}",
        "SK": "PROFILE",
        "location_id": account,
        "poster_account": account,
        "name": name or account,
        "access_token": access_token,
        "is_active": True,
    })
    print(f"  Seeded location {account}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Create DynamoDB tables for ShiftPay")
    parser.add_argument("--endpoint-url", default=None, help="DynamoDB endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--table-suffix", default="", help="Table name suffix (e.g. -dev)")
    parser.add_argument("--region", default="eu-central-1", help="AWS region")
    parser.add_argument("--account", default=None, help="Poster account to register")
    parser.add_argument("--name", default="", help="Display name for --account")
    parser.add_argument("--token", default="", help="Poster access token for --account")
    args = parser.parse_args()

    kwargs: dict[str, Any] = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url

    ddb = boto3.resource("dynamodb", **kwargs)

    print("Creating tables...")
    create_tables(ddb, suffix=args.table_suffix)

    if args.account:
        print("Seeding location...")
        seed_location(ddb, args.account, args.name, args.token, suffix=args.table_suffix)

    print("Done!")


if __name__ == "__main__":
    main()
