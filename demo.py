#!/usr/bin/env python
from sdk.pyproducts import ProductApiError, ProductClient


def main():
    c = ProductClient()

    # -----------------------------
    # Lookup before any write
    # -----------------------------
    print("Looking up product 42 before it exists...")
    try:
        c.get_product(42)
    except ProductApiError as e:
        print(f"  {e.status_code} {e.error}: {e.details}")

    # -----------------------------
    # Create, then replace
    # -----------------------------
    print("\nStoring details for product 42...")
    print(c.put_details(42, "SKU-42-A", "Acme", category_id=3, weight=250, some_other_id=7))

    print("\nReplacing details for product 42 (no merging)...")
    print(c.put_details(42, "SKU-42-B", "Globex", category_id=5, weight=900))

    print("\nReading product 42 back...")
    print(c.get_product(42))

    # -----------------------------
    # Rejected requests
    # -----------------------------
    print("\nBody product_id is ignored in favour of the path...")
    print(c.put_raw(43, {"product_id": 999, "sku": "S-43", "manufacturer": "Initech",
                         "category_id": 1, "weight": 10, "some_other_id": 0}))

    print("\nUnknown field...")
    try:
        c.put_raw(43, {"sku": "S-43", "manufacturer": "Initech", "category_id": 1,
                       "weight": 10, "foo": 1})
    except ProductApiError as e:
        print(f"  {e.status_code} {e.error}: {e.details}")

    print("\nEmpty sku...")
    try:
        c.put_details(43, "", "Initech", category_id=1, weight=10)
    except ProductApiError as e:
        print(f"  {e.status_code} {e.error}: {e.details}")

    print("\nNon-positive id...")
    try:
        c.get_product(0)
    except ProductApiError as e:
        print(f"  {e.status_code} {e.error}: {e.details}")


if __name__ == "__main__":
    main()
