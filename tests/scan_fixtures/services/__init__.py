from compwire import component


# Directory scans skip dunder files; loading this one would register "clock" twice.
@component("clock")
class ShadowClock:
    pass
