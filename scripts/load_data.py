#!/usr/bin/env python
"""Script to seed a Supabase project with the demo customers, jobs and stock.

Tables must exist first (see DESIGN.md): customers, jobs, expenses, users and
data, each with columns ``id text primary key`` and ``doc jsonb``.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from supabase import create_client

from clearview.config import get_settings
from clearview.data.demo import demo_documents
from clearview.models.vehicle import utc_now
from clearview.services.store import SupabaseStore


def main():
    settings = get_settings()
    if not settings.use_supabase:
        print("Error: SUPABASE_URL and SUPABASE_KEY must be set")
        sys.exit(1)

    store = SupabaseStore(create_client(settings.supabase_url, settings.supabase_key))
    count = 0
    for collection, records in demo_documents(utc_now()).items():
        for record in records:
            store.upsert(collection, record["id"], record)
            count += 1
    print(f"Successfully loaded {count} demo documents into Supabase")


if __name__ == "__main__":
    main()
