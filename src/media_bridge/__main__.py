from __future__ import annotations

from media_bridge.core.cli import main

raise SystemExit(main())
