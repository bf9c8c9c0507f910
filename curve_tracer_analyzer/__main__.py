from curve_tracer_analyzer.cli import main

raise SystemExit(main())
