import configparser
import os

class Config:

    # Parameters that must lie in [0, 1]
    PROBABILITIES = ('survival_threshold',
                     'mutate_only_prob',
                     'mutate_add_node_prob',
                     'mutate_add_link_prob',
                     'mutate_link_weights_prob',
                     'mutate_toggle_enable_prob',
                     'mutate_gene_reenable_prob',
                     'interspecies_mate_rate',
                     'mate_multipoint_prob',
                     'mate_multipoint_avg_prob',
                     'mate_singlepoint_prob',
                     'mate_only_prob')

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a Config with default values.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a Config with the defaults used by the published
                         NEAT experiments, suitable for tests and manual attribute setting.
        """

        # Default config for testing/manual setup
        if config_file is None:
            self.population_size = 150

            # Set defaults for speciation
            self.compatibility_threshold = 3.0
            self.drop_off_age            = 15
            self.age_significance        = 1.0
            self.survival_threshold      = 0.2

            # Set defaults for mutation
            self.weight_mut_power          = 2.5
            self.mutate_only_prob          = 0.25
            self.mutate_add_node_prob      = 0.03
            self.mutate_add_link_prob      = 0.08
            self.new_link_tries            = 20
            self.mutate_link_weights_prob  = 0.9
            self.mutate_toggle_enable_prob = 0.0
            self.mutate_gene_reenable_prob = 0.0

            # Set defaults for mating
            self.interspecies_mate_rate   = 0.001
            self.mate_multipoint_prob     = 0.6
            self.mate_multipoint_avg_prob = 0.4
            self.mate_singlepoint_prob    = 0.0
            self.mate_only_prob           = 0.2

            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Sentinel for missing default values
        _NO_DEFAULT = object()

        # Helper function to safely parse values
        def get_value(section, key, value_type, default=_NO_DEFAULT):
            try:
                raw_value = parser.get(section, key)
                if raw_value.lower() == 'none':
                    return None
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == bool:
                    return parser.getboolean(section, key)
                elif value_type == str:
                    return raw_value
            except (configparser.NoSectionError, configparser.NoOptionError):
                if default is not _NO_DEFAULT:
                    return default
                raise

        # [POPULATION]

        # The number of organisms in each generation. Reproduction only uses
        # it to detect a species that was granted more offspring than this.
        self.population_size = get_value('POPULATION', 'population_size', int)

        # [SPECIATION]

        # Organisms whose compatibility distance is less than this
        # threshold are considered to be in the same species.
        self.compatibility_threshold = get_value('SPECIATION', 'compatibility_threshold', float)

        # Age (in generations without improvement) after which
        # the fitness of a species is heavily penalized.
        self.drop_off_age = get_value('SPECIATION', 'drop_off_age', int)

        # Fitness multiplier applied to species up to 10 generations old.
        # A value of 1.0 means young species get no fitness boost.
        self.age_significance = get_value('SPECIATION', 'age_significance', float, default=1.0)

        # The fraction of each species allowed to reproduce.
        self.survival_threshold = get_value('SPECIATION', 'survival_threshold', float)

        # [MUTATION]

        # The power of a connection weight perturbation.
        self.weight_mut_power = get_value('MUTATION', 'weight_mut_power', float)

        # The probability that an offspring is produced by mutation only (no mating).
        self.mutate_only_prob = get_value('MUTATION', 'mutate_only_prob', float)

        # The probabilities of the structural mutations. They are tested in this
        # order and at most one structural mutation is applied per offspring.
        self.mutate_add_node_prob = get_value('MUTATION', 'mutate_add_node_prob', float)
        self.mutate_add_link_prob = get_value('MUTATION', 'mutate_add_link_prob', float)

        # Number of attempts the add-link mutation makes to find an open connection.
        self.new_link_tries = get_value('MUTATION', 'new_link_tries', int)

        # Rates consumed by the genome when applying non-structural mutations.
        self.mutate_link_weights_prob  = get_value('MUTATION', 'mutate_link_weights_prob' , float, default=0.9)
        self.mutate_toggle_enable_prob = get_value('MUTATION', 'mutate_toggle_enable_prob', float, default=0.0)
        self.mutate_gene_reenable_prob = get_value('MUTATION', 'mutate_gene_reenable_prob', float, default=0.0)

        # [MATING]

        # The probability that the second parent is picked from another species.
        self.interspecies_mate_rate = get_value('MATING', 'interspecies_mate_rate', float)

        # The crossover operator probabilities. They are evaluated as a cascade,
        # not as a normalized distribution: multipoint is tried first, then
        # multipoint-average against its share of (avg + singlepoint).
        self.mate_multipoint_prob     = get_value('MATING', 'mate_multipoint_prob'    , float)
        self.mate_multipoint_avg_prob = get_value('MATING', 'mate_multipoint_avg_prob', float)
        self.mate_singlepoint_prob    = get_value('MATING', 'mate_singlepoint_prob'   , float)

        # The probability that a mated offspring is not mutated afterwards.
        self.mate_only_prob = get_value('MATING', 'mate_only_prob', float)

        self.validate()

    def validate(self) -> None:
        """
        Check that every probability lies in [0, 1] and that counts are sensible.
        Raises ValueError on the first offending parameter.
        """
        for name in self.PROBABILITIES:
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"'{name}' must be in [0, 1], got {value}")

        if self.population_size <= 0:
            raise ValueError(f"'population_size' must be positive, got {self.population_size}")
        if self.new_link_tries < 0:
            raise ValueError(f"'new_link_tries' must not be negative, got {self.new_link_tries}")

