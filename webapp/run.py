import os
import threading
import time
import webbrowser

import uvicorn

PORT = int(os.environ.get("PROGRAMME_PORT", "8000"))


def open_browser():
    time.sleep(2)  # Wait for server to start
    webbrowser.open(f"http://localhost:{PORT}/docs")


if __name__ == "__main__":
    threading.Thread(target=open_browser, daemon=True).start()

    # workers=1 is standard for desktop apps
    from webapp.main import app
    uvicorn.run(app, host="127.0.0.1", port=PORT, workers=1)
