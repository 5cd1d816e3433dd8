# app/db/connection.py
# Mongo 연결 — motor. 컨테이너가 프로세스당 하나를 소유하고 리포지토리에 넘겨준다.

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase


class MongoConnection:
    def __init__(self, uri: str, db_name: str, server_selection_timeout_ms: int = 5000):
        self.logger = logging.getLogger(__name__)
        self.uri = uri
        self.db_name = db_name
        self.server_selection_timeout_ms = server_selection_timeout_ms
        self._client: Optional[AsyncIOMotorClient] = None
        self._db: Optional[AsyncIOMotorDatabase] = None
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._db is not None

    async def get_database(self) -> AsyncIOMotorDatabase:
        # 첫 사용 시 1회 연결, 이후 캐시된 핸들 반환
        if self._db is not None:
            return self._db

        async with self._lock:
            if self._db is not None:
                return self._db

            self.logger.info(f"MongoDB 연결을 생성합니다. db={self.db_name}")
            client = AsyncIOMotorClient(
                self.uri,
                tz_aware=True,
                serverSelectionTimeoutMS=self.server_selection_timeout_ms,
            )
            db = client[self.db_name]
            try:
                # 연결 확인 (준비 안 됐으면 예외)
                await db.command("ping")
            except Exception as e:
                # 실패한 핸들은 버리고 다음 요청에서 새로 시도
                self.logger.error(f"MongoDB 연결에 실패했습니다. error={e}")
                client.close()
                raise

            self._client = client
            self._db = db
            self.logger.info("MongoDB 연결 성공")
            return db

    async def ping(self) -> bool:
        db = await self.get_database()
        await db.command("ping")
        return True

    async def close(self) -> None:
        # 앱 종료 시 커넥션 정리
        async with self._lock:
            if self._client is not None:
                self._client.close()
            self._client = None
            self._db = None
