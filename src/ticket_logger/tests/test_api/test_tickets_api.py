import pytest


@pytest.mark.asyncio
class TestTicketsApi:

    async def test_ticket_product_workflow(self, client, create_product):
        bread = await create_product(name="Pan")

        created = await client.post("/api/tickets", json={"date": "2024-11-02", "products": [{"id": bread.id}]})
        assert created.status_code == 201
        ticket = created.json()
        assert ticket["date"] == "2024-11-02"
        assert [p["name"] for p in ticket["products"]] == ["Pan"]
        tid = ticket["id"]

        added = await client.post(f"/api/tickets/{tid}/products", json={"name": "Leche"})
        assert added.status_code == 201
        assert [p["name"] for p in added.json()["products"]] == ["Pan", "Leche"]

        clash = await client.post(f"/api/tickets/{tid}/products", json={"name": "LECHE"})
        assert clash.status_code == 400
        assert clash.json()["detail"] == "A product with this name is already on the ticket"

        again = await client.post(f"/api/tickets/{tid}/products/{bread.id}")
        assert again.status_code == 400
        assert again.json()["code"] == "duplicate"

        search = await client.get(f"/api/tickets/{tid}/products/search", params={"q": "le"})
        assert [p["name"] for p in search.json()] == ["Leche"]

        removed = await client.delete(f"/api/tickets/{tid}/products/{bread.id}")
        assert removed.status_code == 200
        assert [p["name"] for p in removed.json()["products"]] == ["Leche"]

        assert (await client.delete(f"/api/tickets/{tid}")).status_code == 204
        assert (await client.get(f"/api/tickets/{tid}")).status_code == 404

    async def test_add_existing_product(self, client, create_ticket, create_product):
        ticket = await create_ticket()
        oil = await create_product(name="Aceite")

        resp = await client.post(f"/api/tickets/{ticket.id}/products/{oil.id}")

        assert resp.status_code == 200
        assert [p["id"] for p in resp.json()["products"]] == [oil.id]

    async def test_update_replaces_products(self, client, create_ticket, create_product):
        bread = await create_product(name="Pan")
        salt = await create_product(name="Sal")
        ticket = await create_ticket(products=[bread])

        resp = await client.put(
            f"/api/tickets/{ticket.id}", json={"date": "2025-01-01", "products": [{"id": salt.id}]}
        )

        assert resp.status_code == 200
        assert resp.json()["date"] == "2025-01-01"
        assert [p["name"] for p in resp.json()["products"]] == ["Sal"]

    async def test_unknown_products_and_tickets(self, client):
        resp = await client.post("/api/tickets", json={"date": "2024-11-02", "products": [{"id": 42}]})
        assert resp.status_code == 400
        assert resp.json()["fields"] == ["products"]

        assert (await client.get("/api/tickets/999")).status_code == 404
        assert (await client.get("/api/tickets/999/products/search", params={"q": "x"})).status_code == 404

    async def test_invalid_date(self, client):
        resp = await client.post("/api/tickets", json={"date": "not-a-date", "products": []})
        assert resp.status_code == 400
        assert resp.json()["fields"] == ["date"]
