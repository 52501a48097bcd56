from enum import Enum

# ==========================================
# 1. Instance Template Properties
# ==========================================

class InstanceTemplateProperty(str, Enum):
    """
    Configuration property tokens of an Azure compute instance template.

    The value of each member is the config key the host uses for the field.
    """
    VMSIZE = "type"
    COMPUTE_RESOURCE_GROUP = "computeResourceGroup"
    VIRTUAL_NETWORK = "virtualNetwork"
    VIRTUAL_NETWORK_RESOURCE_GROUP = "virtualNetworkResourceGroup"
    SUBNET_NAME = "subnetName"
    NETWORK_SECURITY_GROUP = "networkSecurityGroup"
    NETWORK_SECURITY_GROUP_RESOURCE_GROUP = "networkSecurityGroupResourceGroup"
    AVAILABILITY_SET = "availabilitySet"
    HOST_FQDN_SUFFIX = "hostFqdnSuffix"
    INSTANCE_NAME_PREFIX = "instanceNamePrefix"
    IMAGE = "image"

    @property
    def config_key(self) -> str:
        return self.value


# ==========================================
# 2. Plugin Config Keys
# ==========================================
PLUGIN_CONFIG_PROVIDER_SECTION = "provider"
AZURE_CONFIG_INSTANCE_SUPPORTED = "supported-instances"
AZURE_CONFIG_INSTANCE_DNS_LABEL_REGEX = "instance-prefix-regex"
AZURE_CONFIG_INSTANCE_FQDN_SUFFIX_REGEX = "dns-fqdn-suffix-regex"

REQUIRED_PLUGIN_CONFIG_FIELDS = [
    AZURE_CONFIG_INSTANCE_SUPPORTED,
    AZURE_CONFIG_INSTANCE_DNS_LABEL_REGEX,
    AZURE_CONFIG_INSTANCE_FQDN_SUFFIX_REGEX,
]

LATEST_IMAGE_VERSION = "latest"

# ==========================================
# 3. Validation Messages
# ==========================================
VIRTUAL_MACHINE_MSG = "Virtual Machine '%s' is not supported."
INSTANCE_NAME_PREFIX_MSG = (
    "Instance name prefix '%s' does not satisfy Azure DNS label requirement: %s."
)
FQDN_SUFFIX_MSG = (
    "FQDN suffix '%s' does not satisfy Azure DNS name suffix requirement: '%s'."
)
RESOURCE_GROUP_MSG = (
    "Resource Group '%s' does not exist. Please create the Resource Group or use an existing one."
)
VIRTUAL_NETWORK_RESOURCE_GROUP_MSG = RESOURCE_GROUP_MSG
NETWORK_SECURITY_GROUP_RESOURCE_GROUP_MSG = RESOURCE_GROUP_MSG
VIRTUAL_NETWORK_MSG = (
    "Virtual Network '%s' does not exist within the Resource Group '%s'. "
    "Please create the Virtual Network or use an existing one."
)
SUBNET_MSG = (
    "Subnet '%s' does not exist under the Virtual Network '%s'. "
    "Please create the subnet or use an existing one."
)
NETWORK_SECURITY_GROUP_MSG = (
    "Network Security Group '%s' does not exist within the Resource Group '%s'. "
    "Please create the Network Security Group or use an existing one."
)
AVAILABILITY_SET_MSG = (
    "Availability Set '%s' does not exist. "
    "Please create the Availability Set or use an existing one."
)
IMAGE_MISSING_IN_AZURE_MSG = "IMAGE '%s' does not exist in Azure. Please verify the input."
IMAGE_MISSING_IN_CONFIG_MSG = (
    "IMAGE '%s' does not exist in configurable image list. Please verify the input."
)
IMAGE_CFG_MISSING_REQUIRED_FIELD_MSG = (
    "IMAGE '%s' config does not have all required fields. Please check plugin config file."
)
COMMUNICATION_MSG = (
    "Cannot communicate with Azure due to a connection error while validating: '%s'."
)
MALFORMED_ARGUMENT_MSG = (
    "Azure rejected the request while validating: '%s'. "
    "Please check permissions, existence, spelling, etc."
)
GENERIC_MSG = "Exception occurred during validation"

# ==========================================
# 4. Logging / Settings
# ==========================================
LOGGER_NAME = "azure_template_validator"
SETTINGS_ENV_PREFIX = "AZURE_VALIDATOR_"
DEFAULT_LOCALE = "en_US"
