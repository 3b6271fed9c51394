"""001_driver_portal

Tables and token procedure read by the driver portal: companies,
car_types, drivers, projects and generate_driver_token().

Revision ID: 0001
Revises: (none)
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ------------------------------------------------------------------
    # Extensions
    # ------------------------------------------------------------------
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    # ------------------------------------------------------------------
    # Lookup tables
    # ------------------------------------------------------------------
    op.execute("""
        CREATE TABLE companies (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            name VARCHAR(200) NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
        )
    """)

    op.execute("""
        CREATE TABLE car_types (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            name VARCHAR(100) NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
        )
    """)

    # --- drivers ---
    op.execute("""
        CREATE TABLE drivers (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            license VARCHAR(50) NOT NULL,
            name VARCHAR(100) NOT NULL,
            phone VARCHAR(30),
            pin VARCHAR(20),
            auth_token VARCHAR(128) UNIQUE,
            active BOOLEAN NOT NULL DEFAULT TRUE,
            created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
        )
    """)
    op.execute("CREATE INDEX ix_drivers_license ON drivers (license)")

    # --- projects ---
    op.execute("""
        CREATE TABLE projects (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            company_id UUID REFERENCES companies(id) ON DELETE SET NULL,
            driver_id UUID REFERENCES drivers(id) ON DELETE SET NULL,
            car_type_id UUID REFERENCES car_types(id) ON DELETE SET NULL,
            client_name VARCHAR(200) NOT NULL,
            client_phone VARCHAR(30),
            pickup_location TEXT NOT NULL,
            dropoff_location TEXT NOT NULL,
            date DATE NOT NULL,
            time TIME NOT NULL,
            passengers INTEGER NOT NULL DEFAULT 1,
            price NUMERIC(10, 2) NOT NULL,
            driver_fee NUMERIC(10, 2),
            status VARCHAR(20) NOT NULL DEFAULT 'active',
            description TEXT,
            booking_id VARCHAR(50),
            created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
        )
    """)
    op.execute(
        "CREATE INDEX ix_projects_driver_status_schedule "
        "ON projects (driver_id, status, date, time)"
    )

    # ------------------------------------------------------------------
    # Token rotation
    # ------------------------------------------------------------------
    op.execute("""
        CREATE OR REPLACE FUNCTION generate_driver_token(p_driver_id UUID)
        RETURNS TEXT AS $$
        DECLARE
            new_token TEXT := encode(gen_random_bytes(24), 'hex');
        BEGIN
            UPDATE drivers SET auth_token = new_token WHERE id = p_driver_id;
            IF NOT FOUND THEN
                RAISE EXCEPTION 'driver % not found', p_driver_id;
            END IF;
            RETURN new_token;
        END;
        $$ LANGUAGE plpgsql SECURITY DEFINER
    """)


def downgrade() -> None:
    op.execute("DROP FUNCTION IF EXISTS generate_driver_token(UUID)")
    op.execute("DROP TABLE IF EXISTS projects")
    op.execute("DROP TABLE IF EXISTS drivers")
    op.execute("DROP TABLE IF EXISTS car_types")
    op.execute("DROP TABLE IF EXISTS companies")
