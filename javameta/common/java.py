WILDCARD = "all"

# platformOptions generation: RAM values must be a multiple of this
RAM_INTERVAL = 512

MATRIX_GENERATION_KEY = "validationMatrices"
OPTIONS_GENERATION_KEY = "platformOptions"
DISTRIBUTION_JAVA_KEY = "javaOptions"

# keys of the platformOptions generation that may appear without platformOptions
OPTIONS_BASE_KEYS = ("distribution", "supported", "suggestedMajor", "ram")

CORRETTO_URL = "https://aws.amazon.com/corretto/"
TEMURIN_URL = "https://projects.eclipse.org/projects/adoptium.temurin"
