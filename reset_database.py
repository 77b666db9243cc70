#!/usr/bin/env python3
"""Drop every wizard collection so the API starts from an empty database."""

from dotenv import load_dotenv

load_dotenv()

from resume_wizard.database import ALL_COLLECTIONS, close_mongo_connection, create_indexes, get_database


def reset_all_collections():
    """Drop all collections and recreate their indexes."""
    db = get_database()

    print("Clearing all collections...")
    for collection_name in ALL_COLLECTIONS:
        try:
            db[collection_name].drop()
            print(f"   dropped {collection_name}")
        except Exception as e:
            print(f"   could not drop {collection_name}: {e}")

    create_indexes()
    print("\nDatabase reset complete. Sessions, cached jobs, uploaded files and optimizations were removed.")


if __name__ == "__main__":
    print("Resetting the resume wizard database.")
    print("   This will DELETE ALL existing data.")

    confirm = input("\nAre you sure? Type 'yes' to continue: ")
    if confirm.lower() == 'yes':
        try:
            reset_all_collections()
        finally:
            close_mongo_connection()
    else:
        print("Reset cancelled.")
