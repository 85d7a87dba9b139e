# src/fxsync/__main__.py
from fxsync.app import main

main()
