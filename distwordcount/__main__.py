import sys

from distwordcount.client.client import main

sys.exit(main())
