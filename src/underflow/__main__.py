from underflow.main import main

raise SystemExit(main())
