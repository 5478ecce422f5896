#!/usr/bin/env python3
"""
Script to copy the JSON-file directory into the hosted document database.

This script will:
1. Read the nested department -> section -> student tree from the data file
2. Create every department, section and student the hosted store is missing
3. Leave records that already exist in the hosted store untouched
"""

import argparse
import logging
import sys

from campus_directory.config.settings import settings
from campus_directory.errors import DirectoryError
from campus_directory.storage import HostedDirectoryStore, JsonFileDirectoryStore
from campus_directory.storage.sync import sync_tree


def main():
    parser = argparse.ArgumentParser(description="Copy the JSON-file directory into the hosted store")
    parser.add_argument("--data-file", default=settings.DATA_FILE, help="Path of the nested JSON data file")
    parser.add_argument("--hosted-url", default=settings.HOSTED_DB_URL, help="Base URL of the hosted database")
    parser.add_argument("--auth", default=settings.HOSTED_DB_AUTH, help="Auth token for the hosted database")
    parser.add_argument("--dry-run", action="store_true", help="Report what would be copied without writing")

    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    if not args.hosted_url:
        print("Error: no hosted database URL. Set HOSTED_DB_URL or pass --hosted-url.")
        return 1

    source = JsonFileDirectoryStore(args.data_file)
    target = HostedDirectoryStore(
        base_url=args.hosted_url,
        auth_token=args.auth,
        timeout=settings.HOSTED_DB_TIMEOUT,
        max_retries=settings.HOSTED_DB_MAX_RETRIES,
        backoff=settings.HOSTED_DB_BACKOFF,
    )

    print(f"Syncing {args.data_file} -> {args.hosted_url}{' (dry run)' if args.dry_run else ''}")
    try:
        counts = sync_tree(source, target, dry_run=args.dry_run)
    except DirectoryError as e:
        print(f"ERROR: sync failed with {e.error}: {e.message}")
        return 1
    finally:
        target.close()

    verb = "Would copy" if args.dry_run else "Copied"
    print(f"{verb} {counts['departments']} departments, {counts['sections']} sections, {counts['students']} students.")
    if counts["conflicts"]:
        print(f"WARNING: skipped {counts['conflicts']} record(s) whose ids are already used elsewhere in the hosted store.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
