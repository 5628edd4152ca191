"""
Utility functions for the Nanoleaf library
"""
import asyncio
import sys
from typing import Callable, Any

from .exceptions import NanoleafError


def run_with_keyboard_interrupt(main_func: Callable[[], Any]) -> None:
    """
    Run an async main function with graceful KeyboardInterrupt handling.
    
    This function wraps asyncio.run() to catch KeyboardInterrupt (Ctrl+C) and
    provide a clean shutdown experience. Library errors end the process with
    a non-zero status.
    
    Args:
        main_func: The async main function to run
    """
    try:
        asyncio.run(main_func())
    except KeyboardInterrupt:
        print("\n🛑 Interrupted by user (Ctrl+C)")
        print("Shutting down gracefully...")
        sys.exit(0)
    except (NanoleafError, ValueError, OSError) as e:
        print(f"❌ Error: {e}")
        sys.exit(1)
