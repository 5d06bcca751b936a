"""add_rls_policies

Revision ID: 8c15f3a6d274
Revises: 4b7d2e91c0a3
Create Date: 2026-03-09 15:02:11.847320

"""

from collections.abc import Sequence

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "8c15f3a6d274"
down_revision: str | Sequence[str] | None = "4b7d2e91c0a3"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

TABLES = ["profiles", "swipes", "matches", "messages", "reported_content"]


def upgrade() -> None:
    """Add Row Level Security policies for the dating tables.

    The FastAPI backend connects with a service account that bypasses RLS.
    These policies apply to direct Supabase client connections.
    """
    # --- Helper: admin role lives in the JWT's app_metadata ---
    op.execute("""
        CREATE OR REPLACE FUNCTION is_admin()
        RETURNS BOOLEAN
        LANGUAGE sql
        STABLE
        SET search_path = public
        AS $$
            SELECT coalesce(
                (SELECT auth.jwt()) -> 'app_metadata' ->> 'role' = 'admin',
                false
            );
        $$;
    """)

    for table in TABLES:
        op.execute(f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY;")

    # --- Profiles policies ---
    # SELECT: any signed-in user can browse profiles
    op.execute("""
        CREATE POLICY profiles_select ON profiles
            FOR SELECT USING (
                (SELECT auth.uid()) IS NOT NULL
            );
    """)
    # INSERT/UPDATE: only the owner, or an admin (verification)
    op.execute("""
        CREATE POLICY profiles_insert ON profiles
            FOR INSERT WITH CHECK (
                id = (SELECT auth.uid())
            );
    """)
    op.execute("""
        CREATE POLICY profiles_update ON profiles
            FOR UPDATE USING (
                id = (SELECT auth.uid()) OR is_admin()
            );
    """)
    op.execute("""
        CREATE POLICY profiles_delete ON profiles
            FOR DELETE USING (
                id = (SELECT auth.uid()) OR is_admin()
            );
    """)

    # --- Swipes policies (append-only) ---
    op.execute("""
        CREATE POLICY swipes_select ON swipes
            FOR SELECT USING (
                swiper_id = (SELECT auth.uid())
                OR swiped_id = (SELECT auth.uid())
            );
    """)
    op.execute("""
        CREATE POLICY swipes_insert ON swipes
            FOR INSERT WITH CHECK (
                swiper_id = (SELECT auth.uid())
            );
    """)

    # --- Matches policies ---
    op.execute("""
        CREATE POLICY matches_select ON matches
            FOR SELECT USING (
                user_id = (SELECT auth.uid())
                OR matched_user_id = (SELECT auth.uid())
                OR is_admin()
            );
    """)
    # UPDATE: admins only (unmatch)
    op.execute("""
        CREATE POLICY matches_update ON matches
            FOR UPDATE USING (is_admin());
    """)

    # --- Messages policies ---
    # SELECT: participants of a matched pair, or an admin
    op.execute("""
        CREATE POLICY messages_select ON messages
            FOR SELECT USING (
                is_admin()
                OR match_id IN (
                    SELECT id FROM matches
                    WHERE status = 'matched'
                    AND (
                        user_id = (SELECT auth.uid())
                        OR matched_user_id = (SELECT auth.uid())
                    )
                )
            );
    """)

    # --- Reported content policies ---
    op.execute("""
        CREATE POLICY reported_content_insert ON reported_content
            FOR INSERT WITH CHECK (
                reporter_id = (SELECT auth.uid())
            );
    """)
    op.execute("""
        CREATE POLICY reported_content_select ON reported_content
            FOR SELECT USING (is_admin());
    """)
    op.execute("""
        CREATE POLICY reported_content_update ON reported_content
            FOR UPDATE USING (is_admin());
    """)


def downgrade() -> None:
    """Drop all RLS policies and disable RLS."""
    policies = [
        ("reported_content_update", "reported_content"),
        ("reported_content_select", "reported_content"),
        ("reported_content_insert", "reported_content"),
        ("messages_select", "messages"),
        ("matches_update", "matches"),
        ("matches_select", "matches"),
        ("swipes_insert", "swipes"),
        ("swipes_select", "swipes"),
        ("profiles_delete", "profiles"),
        ("profiles_update", "profiles"),
        ("profiles_insert", "profiles"),
        ("profiles_select", "profiles"),
    ]
    for policy_name, table_name in policies:
        op.execute(f"DROP POLICY IF EXISTS {policy_name} ON {table_name};")

    for table in reversed(TABLES):
        op.execute(f"ALTER TABLE {table} DISABLE ROW LEVEL SECURITY;")

    op.execute("DROP FUNCTION IF EXISTS is_admin();")
