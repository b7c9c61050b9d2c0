from asyncpg import Connection

class UserRepository:

    def __init__(self, conn: Connection):
        self.conn = conn

    async def get_by_ids(self, user_ids: list[int]) -> dict[int, dict]:
        if not user_ids:
            return {}
        sql = "SELECT * FROM users WHERE id = ANY($1::int[]);"
        records = await self.conn.fetch(sql, user_ids)
        return {record["id"]: dict(record) for record in records}
