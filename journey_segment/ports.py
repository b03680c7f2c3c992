"""
Distance from a position to each of the known ports.

Journey boundaries and interval labels both depend on whether a vessel is
inside a port zone, so every position in a run is compared against the same
small set of ports.  Consecutive samples are usually within a few metres of
each other, so results are cached on the coordinate rounded to 3 decimal
places (about 111 m).
"""


import logging
from collections import OrderedDict, namedtuple

import pyproj

logging.basicConfig()
logger = logging.getLogger(__file__)
logger.setLevel(logging.WARNING)


EARTH_RADIUS_KM = 6371
PORT_ZONE_DISTANCE_KM = 5
DEFAULT_CACHE_SIZE = 10000
CACHE_PRECISION = 3

Port = namedtuple("Port", ["name", "lat", "lon"])

DEFAULT_PORTS = (
    Port("Algeciras", 36.128740148, -5.439981128),
    Port("Tanger Med", 35.880312709, -5.515627045),
    Port("Ceuta", 35.889, -5.307),
    Port("Gibraltar", 36.147611, -5.365393),
)


class PortAnalysis(namedtuple("PortAnalysis", ["distances", "nearest_port", "nearest_distance"])):

    """
    Distances in km from one position to every port, keyed by port name,
    plus the closest port.
    """

    __slots__ = ()

    def __getitem__(self, key):
        if isinstance(key, str):
            return self.distances[key]
        return super(PortAnalysis, self).__getitem__(key)

    def within(self, km):
        return self.nearest_distance <= km

    def to_dict(self):
        d = dict(self.distances)
        d["nearestPort"] = self.nearest_port
        d["nearestDistance"] = self.nearest_distance
        return d


class PortProximityAnalyzer(object):

    """
    Compute great circle distances to a fixed set of ports.

    Each pipeline run owns its analyzer, so the cache is never shared
    between runs.  Once `cache_size` entries are stored the oldest entry is
    evicted.

        >>> analyzer = PortProximityAnalyzer()
        >>> analyzer.analyze(36.1287, -5.4400).nearest_port
        'Algeciras'
    """

    def __init__(self, ports=DEFAULT_PORTS, cache_size=DEFAULT_CACHE_SIZE):

        """
        Parameters
        ----------
        ports : sequence of Port, optional
            Ports to measure against.  Ties on distance go to the port listed
            first.
        cache_size : int, optional
            Maximum number of cached positions.  0 disables the cache.
        """
        if not ports:
            raise ValueError("at least one port is required")
        self.ports = tuple(Port(*p) for p in ports)
        self.cache_size = cache_size
        # Spherical earth, so the geodesic is the haversine great circle
        self._geod = pyproj.Geod(a=EARTH_RADIUS_KM * 1000.0, f=0.0)
        self._cache = OrderedDict()

    def __repr__(self):
        return "<{cname}() ports={ports} cached={cached} at {id_}>".format(
            cname=self.__class__.__name__,
            ports=[p.name for p in self.ports],
            cached=len(self._cache),
            id_=hash(self),
        )

    def __len__(self):
        return len(self._cache)

    def distance_km(self, lat1, lon1, lat2, lon2):
        """
        Great circle distance between two positions, in km.
        """
        _, _, meters = self._geod.inv(lon1, lat1, lon2, lat2)
        return meters / 1000.0

    @staticmethod
    def _cache_key(lat, lon):
        return (round(lat, CACHE_PRECISION), round(lon, CACHE_PRECISION))

    def _compute(self, lat, lon):
        distances = OrderedDict()
        nearest_port = None
        nearest_distance = None
        for port in self.ports:
            dist = self.distance_km(lat, lon, port.lat, port.lon)
            distances[port.name] = dist
            if nearest_distance is None or dist < nearest_distance:
                nearest_port = port.name
                nearest_distance = dist
        return PortAnalysis(distances, nearest_port.strip(), nearest_distance)

    def analyze(self, lat, lon):
        """
        Measure the distance from a position to every port.

        Returns
        -------
        PortAnalysis
        """
        key = self._cache_key(lat, lon)
        result = self._cache.get(key)
        if result is not None:
            return result

        result = self._compute(lat, lon)
        if self.cache_size > 0:
            if len(self._cache) >= self.cache_size:
                evicted, _ = self._cache.popitem(last=False)
                logger.debug("Evicting cached position %s", evicted)
            self._cache[key] = result
        return result

    def analyze_row(self, row):
        """
        Like `analyze()` but for a `RawDataRow`.  Rows without a usable
        position produce `None`.
        """
        if not row.has_position:
            return None
        return self.analyze(row.latitude, row.longitude)

    def clear(self):
        """
        Forget all cached positions.
        """
        self._cache.clear()
