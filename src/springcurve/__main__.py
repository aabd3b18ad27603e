from springcurve.sim import main

main()
