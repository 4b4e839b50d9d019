"""Entry point for ``python -m remotecontrol``.

Usage:
    python -m remotecontrol server --port 4000 --amf-port 6000
    python -m remotecontrol client --connect http://localhost:4000
"""

from remotecontrol.cli import main

if __name__ == "__main__":
    main()
