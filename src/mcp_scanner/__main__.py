from mcp_scanner.cli import main

raise SystemExit(main())
