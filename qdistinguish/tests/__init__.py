from .test_bitvec import BitVectorTests
from .test_gf2 import LinearSolverTests
from .test_feistel import FeistelTests
from .test_probe import ProbeTests
from .test_oracle import OracleTests
from .test_sampling import SamplingTests
from .test_distinguish import DistinguisherTests
from .test_config import ConfigTests
from .test_cli import CliTests
