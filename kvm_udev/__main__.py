import sys

from kvm_udev.main import main

sys.exit(main())
