CONFIG = {
    "networks": {
        "local": {
            "host": "localhost",
            "port": 8545,
            "network_id": "*",  # match any network id
        },
    },
    "compilers": {
        "solc": {
            "version": "^0.8",  # latest 0.8.x compiler
        },
    },
}
