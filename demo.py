#!/usr/bin/env python
import os

from sdk.productstore import ProductStoreAPIError, ProductStoreClient


def main():
    c = ProductStoreClient(base_url=os.environ.get("PRODUCTSTORE_URL", "http://127.0.0.1:5000"))

    print("Health:", c.health())

    # -----------------------------
    # Create products
    # -----------------------------
    print("\nCreating products...")
    pen = c.create_product("Pen", "Blue ink", 1.5, 100)
    notebook = c.create_product("Notebook", "A5, dotted", 4.25, 20)
    print(pen)
    print(notebook)

    # -----------------------------
    # Read one / read all
    # -----------------------------
    print("\nFetching pen...")
    print(c.get_product(pen["id"]))

    print("\nListing products...")
    print(c.list_products())

    # -----------------------------
    # Update (full replacement)
    # -----------------------------
    print("\nUpdating pen...")
    print(c.update_product(pen["id"], "Pen", "Black ink", 1.75, 80))
    print(c.get_product(pen["id"]))

    # -----------------------------
    # Delete
    # -----------------------------
    print("\nDeleting products...")
    print(c.delete_product(pen["id"]))
    print(c.delete_product(notebook["id"]))

    try:
        c.get_product(pen["id"])
    except ProductStoreAPIError as e:
        print(f"After delete: {e}")


if __name__ == "__main__":
    main()
