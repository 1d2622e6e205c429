import sys
import os
import traceback

# Add project root to path
sys.path.append(os.getcwd())

print("Starting verification...")

try:
    from cinema.core import config
    print("Config imported.")

    from sqlalchemy.orm import configure_mappers

    # Import Base last (and all models)
    from cinema.db.base import Base
    print("Base imported. Models loaded.")

    print("Checking ORM mappings...")
    configure_mappers()
    print("SUCCESS: ORM mappings are valid.")

    # Compile the reservations DDL to confirm the seat uniqueness constraint is emitted
    from sqlalchemy.dialects import postgresql
    from sqlalchemy.schema import CreateTable

    ddl = str(CreateTable(Base.metadata.tables["reservations"]).compile(dialect=postgresql.dialect()))
    if "uq_reservation_seat" not in ddl:
        raise RuntimeError("reservations table is missing uq_reservation_seat")
    print(ddl)
    print("SUCCESS: reservation uniqueness constraint present.")

except Exception:
    print("FAILURE: Model verification failed.")
    traceback.print_exc()
    sys.exit(1)
