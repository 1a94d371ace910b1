from smbpi.ppd import loads, utils
