"""Quick check of database state."""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from library.db import BookStore, LoanStore, UserStore, get_db

db = get_db()

print("=== Books ===")
books = BookStore(db).find_all()
print(f"Total: {len(books)}")
for b in books:
    state = "in" if b.available else "OUT"
    print(f"  {b.id:>4} | {b.title[:40]:<40} | {b.isbn:<17} | {state}")

print("\n=== Users ===")
users = UserStore(db).find_all()
print(f"Total: {len(users)}")
for u in users:
    print(f"  {u.id:>4} | {u.name[:30]:<30} | {u.email}")

print("\n=== Open loans ===")
loans = LoanStore(db).find_all(open_only=True)
print(f"Total: {len(loans)}")
for loan in loans:
    print(f"  book {loan.book_id} -> user {loan.user_id} since {loan.borrowed_at}")

db.close()
