"""
tactus
======

Exact rational modelling of musical rhythm and tempo

Proportions
-----------

.. seealso:: :py:mod:`tactus.proportiontree`, :py:mod:`tactus.durationtree`

A tree of integer proportions describes nested tuplets. It is normalized so that
every node can be written with one power-of-two subdivision and then bound to a
concrete :class:`~tactus.duration.MetricalDuration`:

.. code-block:: python

    >>> durationTree(16, [1, [1, 2, 3]])
    Branch(4/16, [Leaf(1/16), Leaf(2/16), Leaf(3/16)])

Meters and tempi
----------------

.. seealso:: :py:mod:`tactus.spanning`, :py:mod:`tactus.meter`, :py:mod:`tactus.stratum`

Meters and tempo interpolations are kept in spanning containers: sequences of
elements keyed by their cumulative offset, which can be queried by offset and
fragmented. A :class:`~tactus.stratum.Stratum` maps metrical time to seconds.
"""
from .common import F
from .duration import *
from .tree import *
from .proportiontree import *
from .durationtree import *
from .spanning import *
from .meter import *
from .easing import *
from .tempo import *
from .stratum import *
from .config import config
