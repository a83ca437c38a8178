#!/usr/bin/env python3
"""Helper script to check the .env file and the delivery data source it selects."""

from pathlib import Path
import os
import sys

TEMPLATE = """# Supabase configuration (zones and pricing are read from here when set)
DLV_SUPABASE_URL=https://your-project-id.supabase.co
DLV_SUPABASE_KEY=your-service-role-key-here

# API configuration
DLV_API_PREFIX=/api
# DLV_FRONTEND_ALLOWED_ORIGINS=http://localhost:5173,http://127.0.0.1:5173

# Tariff workbook used when Supabase is not configured
DLV_TARIFF_FILE=./data/delivery_tariffs.xlsx

# Pricing and lead-time policy
# DLV_FREE_WEIGHT_KG=1
# DLV_FREE_DISTANCE_KM=5
# DLV_FAST_PATH_CITIES=["Douala","Yaoundé","Bafoussam","Bamenda","Garoua"]
# DLV_REGION_LEAD_DAYS={"Centre":2,"Littoral":2,"Extrême-Nord":5}
# DLV_DEFAULT_LEAD_DAYS=3
"""


def _mask(value: str) -> str:
    if len(value) > 20:
        return value[:20] + "..." + value[-6:]
    return value


def main():
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("Delivery Fee API environment checker")
    print("=" * 60)
    print()

    if not env_file.exists():
        print(f"❌ .env file NOT found at: {env_file}")
        env_file.write_text(TEMPLATE, encoding="utf-8")
        print(f"✅ Created template .env file at: {env_file}")
        print("⚠️  Edit it with your Supabase credentials or point DLV_TARIFF_FILE at a workbook.")
        return

    print(f"✅ Found .env file at: {env_file}")
    print()

    for name in ("DLV_SUPABASE_URL", "DLV_SUPABASE_KEY"):
        value = os.getenv(name)
        if value:
            print(f"✅ {name} (from environment): {_mask(value)}")
        else:
            print(f"ℹ️  {name} not set in process environment (may still come from .env)")
    print()

    try:
        sys.path.insert(0, str(project_root / "src"))
        from delivery_fees.config import settings
    except Exception as e:
        print(f"❌ Error loading config: {e}")
        print("Make sure you're running this from the project root directory")
        return

    if settings.supabase_url and settings.supabase_key:
        print("=" * 60)
        print(f"✅ Zones will be read from Supabase: {settings.supabase_url[:30]}...")
        print("=" * 60)
    elif settings.tariff_file.exists():
        print("=" * 60)
        print(f"✅ Supabase not configured; zones will be read from {settings.tariff_file}")
        print("=" * 60)
    else:
        print("=" * 60)
        print("❌ ERROR: no delivery data source available")
        print("=" * 60)
        print(f"Configure Supabase or create the tariff workbook at {settings.tariff_file}")


if __name__ == "__main__":
    main()
