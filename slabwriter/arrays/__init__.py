from slabwriter.arrays.arrays import Contribution
from slabwriter.arrays.selectors import RegionSelection, select, select_all
