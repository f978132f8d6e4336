from flow_version.cli import main

main()
