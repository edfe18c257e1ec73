import sys

from sqs_statsd.main import main

sys.exit(main())
