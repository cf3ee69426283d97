# scripts/export_openapi.py
from main import app

with app.test_client() as c:
    res = c.get("/swagger.json")
    with open("openapi.json", "wb") as fh:
        fh.write(res.data)
    print("→ openapi.json generated")
