#!/usr/bin/env python3
"""
seed_data.py

Generates a small Vietnamese convenience-store catalog to CSVs under a local folder
(default: sample_data), ready for the CSV data access backend.

Entities:
- products, customers, store_settings, qr_accounts

Orders are not seeded; the POS appends them to orders.csv / order_items.csv.

Run:
  python -m retailpos.seed_data --products 60 --customers 25
"""

from __future__ import annotations
import argparse
import csv
import os
import random
import sys
from typing import Dict, List, Optional

from retailpos.config import get_config

# -----------------------------
# Catalog building blocks
# -----------------------------

# (base name, unit, price range in thousand VND)
BASE_PRODUCTS = [
    ("Nước ngọt Coca Cola", "Lon", (10, 14)),
    ("Nước suối Aquafina", "Chai", (5, 8)),
    ("Trà xanh Không Độ", "Chai", (9, 12)),
    ("Cà phê sữa Highlands", "Lon", (14, 18)),
    ("Sữa tươi TH True Milk", "Hộp", (30, 38)),
    ("Sữa chua Vinamilk", "Hộp", (6, 9)),
    ("Bánh mì sandwich", "Gói", (20, 28)),
    ("Bánh quy Cosy", "Gói", (25, 35)),
    ("Mì Hảo Hảo tôm chua cay", "Gói", (4, 6)),
    ("Phở bò ăn liền Vifon", "Gói", (8, 12)),
    ("Snack khoai tây Lay's", "Gói", (10, 20)),
    ("Kẹo cao su Doublemint", "Thanh", (5, 8)),
    ("Kem đánh răng P/S", "Tuýp", (35, 55)),
    ("Dầu gội Head & Shoulders", "Chai", (95, 130)),
    ("Sữa tắm Lifebuoy", "Chai", (80, 120)),
    ("Nước rửa chén Sunlight", "Chai", (25, 40)),
    ("Bột giặt OMO", "Túi", (45, 90)),
    ("Khăn giấy Pulppy", "Gói", (15, 25)),
    ("Nước mắm Nam Ngư", "Chai", (30, 45)),
    ("Dầu ăn Neptune", "Chai", (45, 65)),
]
SIZES = ["", "nhỏ", "lớn", "330ml", "500ml", "1L", "200g", "400g"]

LAST_NAMES = ["Nguyễn", "Trần", "Lê", "Phạm", "Hoàng", "Huỳnh", "Phan", "Vũ", "Võ", "Đặng"]
MIDDLE_NAMES = ["Văn", "Thị", "Minh", "Ngọc", "Thanh", "Quốc", "Hữu", "Thu"]
FIRST_NAMES = ["An", "Bình", "Chi", "Dũng", "Giang", "Hòa", "Hùng", "Lan", "Mai", "Nam", "Phương", "Tâm"]
STREETS = ["Lê Lợi", "Nguyễn Huệ", "Trần Hưng Đạo", "Hai Bà Trưng", "Điện Biên Phủ", "Lý Thường Kiệt"]
DISTRICTS = ["Quận 1", "Quận 3", "Quận 5", "Quận 10", "Bình Thạnh", "Phú Nhuận", "Gò Vấp"]
PHONE_PREFIXES = ["090", "091", "093", "097", "098", "086", "070"]


# -----------------------------
# Generators
# -----------------------------

def gen_products(n: int) -> List[Dict]:
    products = []
    for i in range(1, n + 1):
        name, unit, (lo, hi) = BASE_PRODUCTS[(i - 1) % len(BASE_PRODUCTS)]
        size = random.choice(SIZES)
        products.append({
            "id": i,
            "sku": f"SP{i:03d}",
            "barcode": f"893{random.randint(0, 10**10 - 1):010d}",
            "name": f"{name} {size}".strip(),
            "sale_price": random.randint(lo, hi) * 1_000,
            "unit": unit,
        })
    return products


def gen_customers(n: int) -> List[Dict]:
    customers = []
    for i in range(1, n + 1):
        name = f"{random.choice(LAST_NAMES)} {random.choice(MIDDLE_NAMES)} {random.choice(FIRST_NAMES)}"
        customers.append({
            "id": i,
            "name": name,
            "phone": f"{random.choice(PHONE_PREFIXES)}{random.randint(0, 9_999_999):07d}",
            "address": f"{random.randint(1, 300)} {random.choice(STREETS)}, {random.choice(DISTRICTS)}, TP. Hồ Chí Minh",
            "email": "",
        })
    return customers


def gen_store_settings() -> List[Dict]:
    config = get_config()
    return [
        {"setting_key": "store_name", "setting_value": config.store_name},
        {"setting_key": "store_address", "setting_value": config.store_address},
        {"setting_key": "store_phone", "setting_value": config.store_phone},
        {"setting_key": "store_email", "setting_value": ""},
    ]


def gen_qr_accounts() -> List[Dict]:
    return [{
        "provider_id": "970436",
        "provider_name": "Vietcombank",
        "account_number": f"{random.randint(0, 10**10 - 1):010d}",
        "account_owner": "CUA HANG TIEN LOI",
        "status": "active",
    }]


def write_csv(path: str, rows: List[Dict], headers: List[str]) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=headers)
        w.writeheader()
        for r in rows:
            w.writerow(r)


# -----------------------------
# Main
# -----------------------------

def main(argv: Optional[List[str]] = None) -> int:
    config = get_config()

    parser = argparse.ArgumentParser(description="Generate a sample POS catalog to CSVs.")
    parser.add_argument("--products", type=int, default=config.default_seed_products)
    parser.add_argument("--customers", type=int, default=config.default_seed_customers)
    parser.add_argument("--output-dir", type=str, default=config.data_dir)
    parser.add_argument("--seed", type=int, default=config.default_seed_value)
    parser.add_argument("--no-overwrite", action="store_true", help="Fail if CSVs already exist.")
    args = parser.parse_args(argv)

    random.seed(args.seed)

    outdir = args.output_dir
    os.makedirs(outdir, exist_ok=True)

    files = {
        "products": os.path.join(outdir, "products.csv"),
        "customers": os.path.join(outdir, "customers.csv"),
        "store_settings": os.path.join(outdir, "store_settings.csv"),
        "qr_accounts": os.path.join(outdir, "qr_accounts.csv"),
    }
    if args.no_overwrite:
        for p in files.values():
            if os.path.exists(p):
                print(f"Refusing to overwrite existing file: {p}", file=sys.stderr)
                return 2

    products = gen_products(args.products)
    customers = gen_customers(args.customers)

    write_csv(files["products"], products, ["id", "sku", "barcode", "name", "sale_price", "unit"])
    write_csv(files["customers"], customers, ["id", "name", "phone", "address", "email"])
    write_csv(files["store_settings"], gen_store_settings(), ["setting_key", "setting_value"])
    write_csv(files["qr_accounts"], gen_qr_accounts(),
              ["provider_id", "provider_name", "account_number", "account_owner", "status"])

    print(f"Generated data in {outdir}")
    print(f" products: {len(products)} | customers: {len(customers)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
