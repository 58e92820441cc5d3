from contextlib import asynccontextmanager
from typing import Optional

import asyncpg

_pool: Optional[asyncpg.Pool] = None


async def init_pool(database_url: str):
    """Initialize the connection pool."""
    global _pool
    if _pool is None:
        _pool = await asyncpg.create_pool(database_url, min_size=2, max_size=10)
    return _pool


async def get_pool() -> asyncpg.Pool:
    """Get the existing connection pool."""
    global _pool
    if _pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool first.")
    return _pool


async def close_pool():
    """Close the connection pool."""
    global _pool
    if _pool:
        await _pool.close()
        _pool = None


@asynccontextmanager
async def get_connection():
    """Get a database connection from the pool."""
    pool = await get_pool()
    async with pool.acquire() as conn:
        yield conn


async def init_db():
    """Create tables if they don't exist."""
    async with get_connection() as conn:
        # Admin accounts
        await conn.execute("""
            CREATE TABLE IF NOT EXISTS users (
                id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
                email VARCHAR(255) NOT NULL UNIQUE,
                password_hash VARCHAR(255) NOT NULL,
                role VARCHAR(20) NOT NULL DEFAULT 'admin' CHECK (role IN ('admin')),
                is_active BOOLEAN DEFAULT true,
                created_at TIMESTAMP DEFAULT NOW(),
                updated_at TIMESTAMP DEFAULT NOW(),
                last_login TIMESTAMP
            )
        """)
        await conn.execute("""
            CREATE INDEX IF NOT EXISTS idx_users_email ON users(email)
        """)

        # Manuals
        await conn.execute("""
            CREATE TABLE IF NOT EXISTS manuals (
                id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
                title VARCHAR(500) NOT NULL,
                url TEXT NOT NULL DEFAULT '#',
                main_category VARCHAR(255) NOT NULL,
                sub_category VARCHAR(255),
                tags TEXT[],
                reference_links JSONB,
                is_published BOOLEAN NOT NULL DEFAULT true,
                order_index INTEGER NOT NULL DEFAULT 0,
                step_number INTEGER,
                step_name VARCHAR(255),
                created_at TIMESTAMP DEFAULT NOW(),
                updated_at TIMESTAMP DEFAULT NOW()
            )
        """)
        await conn.execute("""
            CREATE INDEX IF NOT EXISTS idx_manuals_category_published
            ON manuals(main_category, is_published, order_index)
        """)
        await conn.execute("""
            CREATE INDEX IF NOT EXISTS idx_manuals_order_index ON manuals(order_index)
        """)

        # Manual requests (intake form)
        await conn.execute("""
            CREATE TABLE IF NOT EXISTS manual_requests (
                id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
                requester_name VARCHAR(255) NOT NULL,
                requester_email VARCHAR(255) NOT NULL,
                department VARCHAR(255),
                manual_title VARCHAR(500) NOT NULL,
                manual_description TEXT NOT NULL,
                urgency VARCHAR(10) NOT NULL DEFAULT 'medium'
                    CHECK (urgency IN ('low', 'medium', 'high')),
                use_case TEXT,
                expected_users TEXT,
                additional_notes TEXT,
                status VARCHAR(20) NOT NULL DEFAULT 'pending'
                    CHECK (status IN ('pending', 'in_progress', 'completed', 'rejected')),
                admin_notes TEXT,
                created_at TIMESTAMP DEFAULT NOW(),
                updated_at TIMESTAMP DEFAULT NOW(),
                completed_at TIMESTAMP,
                manual_id UUID REFERENCES manuals(id) ON DELETE SET NULL
            )
        """)
        await conn.execute("""
            CREATE INDEX IF NOT EXISTS idx_manual_requests_status ON manual_requests(status)
        """)
        await conn.execute("""
            CREATE INDEX IF NOT EXISTS idx_manual_requests_created_at ON manual_requests(created_at DESC)
        """)
