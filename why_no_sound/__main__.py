from why_no_sound.diagnostics.run import main

raise SystemExit(main())
