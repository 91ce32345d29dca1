from sheet_series.cli.main import main

raise SystemExit(main())
