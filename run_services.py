import asyncio
import uvicorn

SERVICES = [
    ("auth_service.app.main:app", 8001),
    ("inventory_service.app.main:app", 8002),
]


async def start_servers(host: str = "0.0.0.0"):
    servers = [
        uvicorn.Server(uvicorn.Config(app, host=host, port=port))
        for app, port in SERVICES
    ]
    # Both apps share one event loop
    await asyncio.gather(*(server.serve() for server in servers))

if __name__ == "__main__":
    try:
        asyncio.run(start_servers())
    except KeyboardInterrupt:
        print("\nShutting down servers...")
