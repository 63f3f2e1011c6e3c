import configdict

config = configdict.CheckedDict()
config.addKey('interpolation.approxResolution', 1024,
              choices=(64, 128, 256, 512, 1024, 2048, 4096, 8192),
              doc='Number of segments per whole note used to approximate the duration '
                  'in seconds of a non-linear tempo interpolation')
config.addKey('tempo.defaultSubdivision', 4, type=int, choices=(1, 2, 4, 8, 16, 32, 64),
              doc='Subdivision of the beat of a Tempo when none is given (4=quarter)')
config.addKey('tempo.defaultBpm', 60.0, type=float, range=(1, 10000),
              doc='Default number of beats per minute')

config.load()
