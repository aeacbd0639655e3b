"""
Start the Ticket Scanner app locally with uvicorn.
"""

import os

import uvicorn

if __name__ == "__main__":
    port = int(os.getenv("PORT", "8000"))
    base_path = os.getenv("BASE_PATH", "").rstrip("/")

    print("=" * 60)
    print("Starting Ticket Scanner")
    print("=" * 60)
    print()
    print("📌 Pages:")
    print(f"   - Login:         GET  http://localhost:{port}{base_path}/login")
    print(f"   - Scan a ticket: GET  http://localhost:{port}{base_path}/")
    print(f"   - Tickets:       GET  http://localhost:{port}{base_path}/tickets")
    print(f"   - Health Check:  GET  http://localhost:{port}/health")
    print()
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "ticket_scanner.main:app",
        host="0.0.0.0",
        port=port,
        reload=os.getenv("ENVIRONMENT", "development") == "development",
        log_level="info"
    )
