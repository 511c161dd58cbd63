import sys
import json
import random
from pathlib import Path

WORDS = [
    "Revenue", "Costs", "Payroll", "Rent", "Travel", "Hardware", "Software",
    "Consulting", "Licensing", "Support", "Marketing", "Research", "Training",
    "Utilities", "Insurance", "Shipping", "Taxes", "Services", "Grants", "Other",
]

def make_records(count, max_children=4):
    """
    Random flat records where every branch's value is the sum of its
    children's values. Leaves get random integer values.
    """
    records = [{"key": 1, "parent": None, "name": "Total", "value": 0}]
    children = {1: []}

    next_key = 2
    while next_key <= count:
        candidates = [k for k, kids in children.items() if len(kids) < max_children]
        parent = random.choice(candidates)
        records.append({
            "key": next_key,
            "parent": parent,
            "name": f"{random.choice(WORDS)} {next_key}",
            "value": 0,
        })
        children[parent].append(next_key)
        children[next_key] = []
        next_key += 1

    # Fill values bottom-up: keys only ever point at smaller keys.
    by_key = {r["key"]: r for r in records}
    for key in sorted(children, reverse=True):
        kids = children[key]
        if kids:
            by_key[key]["value"] = sum(by_key[k]["value"] for k in kids)
        else:
            by_key[key]["value"] = random.randint(1, 1000)

    random.shuffle(records)
    return records

def main():
    if len(sys.argv) != 3:
        print(f"Usage: {sys.argv[0]} /path/to/out.json N")
        sys.exit(1)

    out = Path(sys.argv[1])
    count = int(sys.argv[2])
    if count < 1:
        print("Error: N must be at least 1")
        sys.exit(1)

    records = make_records(count)
    with open(out, 'w', encoding='utf-8') as f:
        json.dump({"data": records}, f, indent=2)

    print(f"Wrote {len(records)} records to {out}")

if __name__ == '__main__':
    main()
