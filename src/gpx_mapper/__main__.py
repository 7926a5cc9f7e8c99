from gpx_mapper.cli import main

main()
