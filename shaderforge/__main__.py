from shaderforge.cli import main

raise SystemExit(main())
