import sys

from contribution_heatmap.main import main


sys.exit(main())
