from pi.grid.cli import main

raise SystemExit(main())
