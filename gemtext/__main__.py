from gemtext.main import main

raise SystemExit(main())
