from redis.asyncio import Redis

from devbytes.config import REDIS_HOST, REDIS_PORT, REDIS_DB


def get_redis_client() -> Redis:
    return Redis(
        host=REDIS_HOST,
        port=REDIS_PORT,
        db=REDIS_DB,
        socket_connect_timeout=5,
        decode_responses=True
    )
