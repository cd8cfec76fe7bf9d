from portwatch.app.main import main

raise SystemExit(main())
