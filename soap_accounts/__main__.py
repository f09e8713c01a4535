from soap_accounts.cli import main

raise SystemExit(main())
