#!/usr/bin/env python
import uuid
from sdk.cartstore import StoreClient

def main():
    c = StoreClient()
    suffix = uuid.uuid4().hex[:6]

    # -----------------------------
    # Create products
    # -----------------------------
    print("Creating products...")
    laptop = c.create_product("Laptop", "14 inch, 16GB RAM", f"LAP-{suffix}", 1500, 3, "electronics")
    mouse = c.create_product("Mouse", "Wireless mouse", f"MOU-{suffix}", 25.5, 10, "electronics",
                             thumbnails=["img/mouse.png"])
    print(laptop)
    print(mouse)

    # -----------------------------
    # List products
    # -----------------------------
    print("\nListing products...")
    print(c.list_products())
    print("\nFirst product only...")
    print(c.list_products(limit=1))

    # -----------------------------
    # Update a product (id is ignored)
    # -----------------------------
    print("\nUpdating laptop price...")
    print(c.update_product(laptop["id"], price=1399, id=999))

    # -----------------------------
    # Carts
    # -----------------------------
    print("\nCreating cart...")
    cart = c.create_cart()
    print(cart)

    print("\nAdding products to cart...")
    c.add_to_cart(cart["id"], laptop["id"])
    c.add_to_cart(cart["id"], mouse["id"])
    print(c.add_to_cart(cart["id"], mouse["id"]))

    print("\nViewing cart...")
    print(c.get_cart(cart["id"]))

    print("\nListing carts...")
    print(c.list_carts())

    # -----------------------------
    # Clean up
    # -----------------------------
    print("\nDeleting cart and products...")
    print(c.delete_cart(cart["id"]))
    print(c.delete_product(laptop["id"]))
    print(c.delete_product(mouse["id"]))

if __name__ == "__main__":
    main()
