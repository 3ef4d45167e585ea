# generate_data.py
import json
import random
import argparse
from datetime import datetime
from pathlib import Path
from faker import Faker

CATEGORIES = ["men's clothing", "women's clothing", "jewelery", "electronics"]

# Setup argument parser
parser = argparse.ArgumentParser(description="Generate a dummy seed file for /api/init.")
parser.add_argument("--rows", type=int, default=60, help="Number of transactions to generate")
parser.add_argument("--year", type=int, default=2023, help="Year the sale dates fall in")
parser.add_argument("--output", default="seed_transactions.json", help="Where to write the JSON array")
args = parser.parse_args()

fake = Faker()
output_file = Path(args.output)

records = []
for index in range(1, args.rows + 1):
    sale_date = fake.date_time_between(
        start_date=datetime(args.year, 1, 1),
        end_date=datetime(args.year, 12, 31, 23, 59, 59),
    )
    records.append({
        "id": index,
        "title": fake.catch_phrase(),
        "description": fake.sentence(nb_words=12),
        "price": round(random.uniform(5.0, 1200.0), 2),  # nosec B311
        "category": random.choice(CATEGORIES),  # nosec B311
        "image": fake.image_url(),
        "sold": fake.boolean(),
        "dateOfSale": sale_date.isoformat() + "Z",
    })

output_file.write_text(json.dumps(records, indent=2), encoding="utf-8")
print(f"Wrote {len(records)} transactions to {output_file}. Point SEED_DATA_URL at it to seed locally.")
