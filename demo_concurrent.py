import asyncio
import uuid
from sdk.cartstore import StoreClient

ADDS = 10

async def add_one(client, cart_id, product_id, n):
    try:
        r = await client.add_to_cart_async(cart_id, product_id)
        if r.status_code == 200:
            print(f"✅ add #{n} accepted")
        else:
            print(f"❌ add #{n} failed: {r.status_code} {r.json()}")
    except Exception as e:
        print(f"❌ add #{n} unexpected failure: {e}")

async def main():
    c = StoreClient()

    product = c.create_product("Gaming Laptop", "Concurrency demo", f"GL-{uuid.uuid4().hex[:6]}", 5000, 2, "electronics")
    cart = c.create_cart()
    print(f"\n🖥️  Product: {product}")
    print(f"🛒 Cart: {cart}")

    # Each add is an independent read-modify-write of the carts file.
    print(f"\n⚡ Sending {ADDS} concurrent adds...")
    await asyncio.gather(*(add_one(c, cart["id"], product["id"], n) for n in range(1, ADDS + 1)))

    final = c.get_cart(cart["id"])
    qty = sum(line["quantity"] for line in final["products"] if line["product"] == product["id"])
    print(f"\n📦 Final cart: {final}")
    if qty == ADDS:
        print(f"All {ADDS} adds landed.")
    else:
        print(f"⚠️  Only {qty} of {ADDS} adds landed (lost updates).")

    c.delete_cart(cart["id"])
    c.delete_product(product["id"])

if __name__ == "__main__":
    asyncio.run(main())
