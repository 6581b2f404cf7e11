from linedit.cli import main

raise SystemExit(main())
