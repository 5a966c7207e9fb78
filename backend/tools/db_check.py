import sqlite3
import sys

DB = sys.argv[1] if len(sys.argv) > 1 else "dev.db"
CATEGORY = sys.argv[2] if len(sys.argv) > 2 else None

conn = sqlite3.connect(DB)
cur = conn.cursor()

print("=== Categories ===")
cur.execute("SELECT id, name FROM categories ORDER BY name")
for r in cur.fetchall():
    print({"id": r[0], "name": r[1]})

print("\n=== Products ===")
if CATEGORY:
    cur.execute(
        "SELECT id, name, title, category_id, image_id, thumbnail_id FROM products WHERE category_id=? ORDER BY name",
        (CATEGORY,),
    )
else:
    cur.execute(
        "SELECT id, name, title, category_id, image_id, thumbnail_id FROM products ORDER BY name LIMIT 50"
    )
for r in cur.fetchall():
    print(
        {
            "id": r[0],
            "name": r[1],
            "title": r[2],
            "category_id": r[3],
            "image_id": r[4],
            "thumbnail_id": r[5],
        }
    )

conn.close()
