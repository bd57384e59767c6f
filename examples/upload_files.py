import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

from goflet import GatewayConfig, UploaderClient, UploadItem
from goflet.uploader.aio import AsyncUploaderClient

load_dotenv()


def upload_sync(paths: list[Path]) -> None:
    items = [UploadItem(p.name, buffer=p.read_bytes()) for p in paths]
    # GatewayConfig.from_env() reads GOFLET_ENDPOINT, GOFLET_JWT_SECRET, ...
    with UploaderClient(GatewayConfig.from_env()) as client:
        result = client.upload_all(items)
    if not result:
        print("token signing failed:", result.error)
        return
    for uploaded in result.results:
        print("uploaded:", uploaded.path, "->", uploaded.retrieval_url)


async def upload_async(paths: list[Path]) -> None:
    items = [UploadItem(f"async/{p.name}", buffer=p.read_bytes()) for p in paths]
    async with AsyncUploaderClient() as client:
        result = await client.upload_all(items)
    for uploaded in result.results:
        print("uploaded (async):", uploaded.retrieval_url)


if __name__ == "__main__":
    files = [Path(arg) for arg in sys.argv[1:]]
    if not files:
        print("Usage: python upload_files.py FILE [FILE ...]")
        sys.exit(2)
    upload_sync(files)
    asyncio.run(upload_async(files))
